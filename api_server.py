from __future__ import annotations

import io
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jurissmart.analysis import analyze_document
from jurissmart.chat import chat_history, chat_reply, stream_chat
from jurissmart.config import CORS_ALLOW_ORIGINS, LOG_LEVEL
from jurissmart.db import get_db, init_db
from jurissmart.drafting import draft_file_name, generate_legal_draft
from jurissmart.errors import INVALID_INPUT, MODEL_UNAVAILABLE, UNPARSEABLE, failure
from jurissmart.flowchart import generate_flowchart
from jurissmart.judgment import CASE_TYPES, COURT_TYPES, predict_judgment
from jurissmart.legality import assess_legality
from jurissmart.penalty import DEFAULT_COUNTRY, build_penalty_report, predict_penalty
from jurissmart.users import (
    DuplicateEmailError,
    PoolExhaustedError,
    authenticate_user,
    public_user,
    register_user,
)

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("api_server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# ----------------------------- FastAPI app ------------------------------------
app = FastAPI(title="JurisSmart API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----------------------------- Models -----------------------------------------
class ChatReq(BaseModel):
    message: str
    thread_id: Optional[str] = None

class ChatStreamReq(BaseModel):
    message: str

class DocumentAnalysisReq(BaseModel):
    document_type: Optional[str] = None
    content: Optional[str] = None

class DraftReq(BaseModel):
    document_type: Optional[str] = None
    description: Optional[str] = None

class DraftDownloadReq(BaseModel):
    document_type: str
    draft: str

class LegalityReq(BaseModel):
    description: Optional[str] = None

class PenaltyReq(BaseModel):
    offense: Optional[str] = None
    country: Optional[str] = DEFAULT_COUNTRY
    region: Optional[str] = None

class PenaltyReportReq(BaseModel):
    offense: str
    country: Optional[str] = DEFAULT_COUNTRY
    region: Optional[str] = None
    penalty: Dict[str, Any]

class JudgmentReq(BaseModel):
    case_description: Optional[str] = None
    involved_sections: Optional[str] = None
    plaintiff: Optional[str] = None
    defendant: Optional[str] = None
    court_type: Optional[str] = None
    case_type: Optional[str] = None
    include_precedents: bool = True
    include_alternatives: bool = True

class FlowchartReq(BaseModel):
    prompt: Optional[str] = None

class SigninReq(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


# ----------------------------- Utils ------------------------------------------
_STATUS_FOR_ERROR = {INVALID_INPUT: 400, UNPARSEABLE: 422, MODEL_UNAVAILABLE: 502}


def _stream_text_file(text: str, filename: str, media_type: str = "text/plain; charset=utf-8"):
    buf = io.BytesIO(text.encode("utf-8"))
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    return StreamingResponse(buf, media_type=media_type, headers=headers)


def _raise_for_result(result: Dict[str, Any]) -> Dict[str, Any]:
    if not result.get("success"):
        raise HTTPException(status_code=_STATUS_FOR_ERROR.get(result.get("error"), 500), detail=result)
    return result


def _auth_error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


# ----------------------------- Endpoints --------------------------------------
@app.get("/api/health")
def health():
    return {"ok": True}


@app.post("/api/chat")
def api_chat(req: ChatReq):
    return _raise_for_result(chat_reply(req.message, req.thread_id))


@app.post("/api/chat/stream")
def api_chat_stream(req: ChatStreamReq):
    if not req.message.strip():
        raise HTTPException(status_code=400, detail=failure(INVALID_INPUT, "Please enter a message"))
    return StreamingResponse(stream_chat(req.message), media_type="text/plain; charset=utf-8")


@app.get("/api/chat/{thread_id}/history")
def api_chat_history(thread_id: str):
    return {"success": True, "thread_id": thread_id, "messages": chat_history(thread_id)}


@app.post("/api/documents/analyze")
def api_analyze_document(req: DocumentAnalysisReq):
    return _raise_for_result(analyze_document(req.document_type, req.content))


@app.post("/api/drafts")
def api_generate_draft(req: DraftReq):
    return _raise_for_result(generate_legal_draft(req.document_type, req.description))


@app.post("/api/download/draft")
def download_draft(req: DraftDownloadReq):
    return _stream_text_file(req.draft, draft_file_name(req.document_type))


@app.post("/api/legality")
def api_legality(req: LegalityReq):
    return _raise_for_result(assess_legality(req.description))


@app.post("/api/penalty")
def api_penalty(req: PenaltyReq):
    return _raise_for_result(predict_penalty(req.offense, req.country, req.region))


@app.post("/api/download/penalty-report")
def download_penalty_report(req: PenaltyReportReq):
    country = req.country or DEFAULT_COUNTRY
    report = build_penalty_report(req.offense, country, req.region, req.penalty)
    return _stream_text_file(report, "penalty-analysis-report.md", media_type="text/markdown; charset=utf-8")


@app.get("/api/judgment/options")
def api_judgment_options():
    return {"court_types": COURT_TYPES, "case_types": CASE_TYPES}


@app.post("/api/judgment")
def api_judgment(req: JudgmentReq):
    return _raise_for_result(predict_judgment(
        req.case_description,
        involved_sections=req.involved_sections,
        plaintiff=req.plaintiff,
        defendant=req.defendant,
        court_type=req.court_type,
        case_type=req.case_type,
        include_precedents=req.include_precedents,
        include_alternatives=req.include_alternatives,
    ))


@app.post("/api/flowchart")
def api_flowchart(req: FlowchartReq):
    return _raise_for_result(generate_flowchart(req.prompt))


@app.post("/api/auth/signup")
async def api_signup(request: Request, db: Session = Depends(get_db)):
    try:
        body = await request.json()
    except ValueError:
        return _auth_error(400, "Invalid request")
    if not isinstance(body, dict):
        return _auth_error(400, "Invalid request")

    username = body.get("username")
    email = body.get("email")
    password = body.get("password")
    if not password:
        return _auth_error(400, "Password required")
    if not email:
        return _auth_error(400, "Email required")
    if not username:
        return _auth_error(400, "Username required")

    try:
        user = await run_in_threadpool(register_user, db, str(username), str(email), str(password))
    except DuplicateEmailError:
        return _auth_error(400, "User with this email already exists")
    except PoolExhaustedError as e:
        return _auth_error(500, "Database connection failed after multiple attempts", str(e.cause))
    except SQLAlchemyError as e:
        return _auth_error(500, "User creation failed", str(e))

    logger.info("--- [Auth] created user %s ---", user.id)
    return {"user": public_user(user)}


@app.post("/api/auth/signin")
def api_signin(req: SigninReq, db: Session = Depends(get_db)):
    if not req.username or not req.password:
        return _auth_error(401, "Invalid credentials")
    user = authenticate_user(db, req.username, req.password)
    if user is None:
        return _auth_error(401, "Invalid credentials")
    return {"user": public_user(user)}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api_server:app", host="0.0.0.0", port=8000)
