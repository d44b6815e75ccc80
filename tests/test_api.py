"""
Endpoint tests: status-code mapping, downloads and credential auth
"""

import json

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from jurissmart import analysis, flowchart, judgment, legality, penalty, users
from jurissmart.users import User, hash_password


def _pool_error():
    return OperationalError("INSERT INTO users", {}, Exception("QueuePool limit reached, connection pool exhausted"))


# ----------------------------- Tools ------------------------------------------

def test_health(client):
    assert client.get("/api/health").json() == {"ok": True}


def test_error_kinds_map_to_status_codes(client, fake_llm):
    resp = client.post("/api/legality", json={"description": ""})
    assert resp.status_code == 400
    assert resp.json()["detail"]["message"] == "Please describe the incident or situation"

    fake_llm(penalty, reply="not json")
    resp = client.post("/api/penalty", json={"offense": "Shoplifting"})
    assert resp.status_code == 422
    assert resp.json()["detail"]["message"] == "Invalid data format received from AI"

    fake_llm(analysis, error="down")
    resp = client.post("/api/documents/analyze", json={"document_type": "fir", "content": "text"})
    assert resp.status_code == 502


def test_judgment_endpoint_and_options(client, fake_llm):
    fake_llm(judgment, reply=json.dumps({"successProbability": 55}))
    resp = client.post("/api/judgment", json={"case_description": "Cheque dishonour", "include_alternatives": False})
    assert resp.status_code == 200
    assert resp.json()["outcome_color"] == judgment.AMBER
    assert resp.json()["alternatives_chart"] == []

    options = client.get("/api/judgment/options").json()
    assert "Supreme Court" in options["court_types"]
    assert "Consumer Protection" in options["case_types"]


def test_legality_endpoint_success(client, fake_llm):
    fake_llm(legality, reply='{"status": "VALID", "simpleSummary": "Fine."}')
    resp = client.post("/api/legality", json={"description": "Selling my own car"})
    assert resp.json()["assessment"]["status"] == "VALID"


def test_download_draft(client):
    resp = client.post("/api/download/draft", json={"document_type": "Rent Agreement", "draft": "THIS AGREEMENT"})
    assert resp.status_code == 200
    assert resp.text == "THIS AGREEMENT"
    assert 'filename="rent-agreement-draft.txt"' in resp.headers["content-disposition"]


def test_download_penalty_report(client):
    resp = client.post("/api/download/penalty-report", json={
        "offense": "Littering",
        "region": "Goa",
        "penalty": {"offenseLevel": "Infraction", "severityScore": 2},
    })
    assert resp.status_code == 200
    assert "- **Jurisdiction:** United States, Goa" in resp.text
    assert resp.headers["content-type"].startswith("text/markdown")


# ----------------------------- Signup -----------------------------------------

def test_signup_creates_user_without_hash(client, db_session):
    resp = client.post("/api/auth/signup", json={"username": "asha", "email": "asha@example.com", "password": "s3cret!"})

    assert resp.status_code == 200
    user = resp.json()["user"]
    assert set(user) == {"id", "username", "email", "created_at"}
    assert user["email"] == "asha@example.com"

    stored = db_session.query(User).filter(User.email == "asha@example.com").one()
    assert stored.password != "s3cret!"
    assert users.verify_password("s3cret!", stored.password)


def test_signup_duplicate_email(client):
    body = {"username": "asha", "email": "dup@example.com", "password": "pw"}
    assert client.post("/api/auth/signup", json=body).status_code == 200
    resp = client.post("/api/auth/signup", json={**body, "username": "other"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "User with this email already exists"}


def test_signup_validation(client):
    resp = client.post("/api/auth/signup", json={"username": "a", "email": "a@example.com"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Password required"}

    resp = client.post("/api/auth/signup", json={"username": "a", "password": "pw"})
    assert resp.json() == {"error": "Email required"}

    resp = client.post("/api/auth/signup", json=["not", "an", "object"])
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request"}

    resp = client.post("/api/auth/signup", content=b"{broken", headers={"content-type": "application/json"})
    assert resp.json() == {"error": "Invalid request"}


def test_signup_retries_pool_errors_then_gives_up(client, monkeypatch):
    attempts = []
    sleeps = []

    def failing_create(db, username, email, password):
        attempts.append(email)
        raise _pool_error()

    monkeypatch.setattr(users, "create_user", failing_create)
    monkeypatch.setattr(users.time, "sleep", lambda seconds: sleeps.append(seconds))

    resp = client.post("/api/auth/signup", json={"username": "a", "email": "a@example.com", "password": "pw"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "Database connection failed after multiple attempts"
    assert "connection pool" in resp.json()["details"]
    assert len(attempts) == 3
    assert sleeps == [1.0, 1.0]


def test_signup_recovers_after_transient_pool_error(client, monkeypatch):
    real_create = users.create_user
    calls = []

    def flaky_create(db, username, email, password):
        calls.append(email)
        if len(calls) == 1:
            raise _pool_error()
        return real_create(db, username, email, password)

    monkeypatch.setattr(users, "create_user", flaky_create)
    monkeypatch.setattr(users.time, "sleep", lambda seconds: None)

    resp = client.post("/api/auth/signup", json={"username": "b", "email": "b@example.com", "password": "pw"})
    assert resp.status_code == 200
    assert len(calls) == 2


def test_signup_other_db_error_not_retried(client, monkeypatch):
    attempts = []

    def failing_create(db, username, email, password):
        attempts.append(email)
        raise OperationalError("INSERT INTO users", {}, Exception("disk I/O error"))

    monkeypatch.setattr(users, "create_user", failing_create)

    resp = client.post("/api/auth/signup", json={"username": "a", "email": "a@example.com", "password": "pw"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "User creation failed"
    assert "disk I/O error" in resp.json()["details"]
    assert len(attempts) == 1


# ----------------------------- Signin -----------------------------------------

def test_signin(client, db_session):
    db_session.add(User(username="ravi", email="ravi@example.com", password=hash_password("pw123")))
    db_session.add(User(username="oauth", email="oauth@example.com", password=None))
    db_session.commit()

    ok = client.post("/api/auth/signin", json={"username": "ravi", "password": "pw123"})
    assert ok.status_code == 200
    assert ok.json()["user"]["email"] == "ravi@example.com"

    for body in (
        {"username": "ravi", "password": "wrong"},
        {"username": "nobody", "password": "pw123"},
        {"username": "oauth", "password": "anything"},
    ):
        resp = client.post("/api/auth/signin", json=body)
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid credentials"}


# ----------------------------- Edge cases -------------------------------------

def test_download_draft_with_non_ascii_type(client):
    resp = client.post("/api/download/draft", json={"document_type": "Rent Agreement – किरायानामा", "draft": "x"})
    assert resp.status_code == 200
    assert resp.text == "x"
    assert 'filename="rent-agreement-draft.txt"' in resp.headers["content-disposition"]


def test_signup_username_required(client):
    resp = client.post("/api/auth/signup", json={"email": "a@example.com", "password": "pw"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Username required"}


def test_signup_duplicate_detected_on_commit(client, db_session, monkeypatch):
    db_session.add(User(username="first", email="race@example.com", password=hash_password("pw")))
    db_session.commit()
    # the lookup misses, so the unique constraint is what rejects the insert
    monkeypatch.setattr(users, "find_user_by_email", lambda db, email: None)

    resp = client.post("/api/auth/signup", json={"username": "second", "email": "race@example.com", "password": "pw"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "User with this email already exists"}


def test_signup_retries_pool_timeout(client, monkeypatch):
    attempts = []
    sleeps = []

    def timing_out_create(db, username, email, password):
        attempts.append(email)
        raise PoolTimeoutError("QueuePool limit of size 5 overflow 10 reached")

    monkeypatch.setattr(users, "create_user", timing_out_create)
    monkeypatch.setattr(users.time, "sleep", lambda seconds: sleeps.append(seconds))

    resp = client.post("/api/auth/signup", json={"username": "t", "email": "t@example.com", "password": "pw"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "Database connection failed after multiple attempts"
    assert len(attempts) == 3
    assert len(sleeps) == 2


def test_chat_stream_blank_message(client):
    resp = client.post("/api/chat/stream", json={"message": "   "})
    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "invalid_input"


def test_flowchart_endpoint_status_codes(client, fake_llm):
    fake_llm(flowchart, reply="Depends on the facts.")
    resp = client.post("/api/flowchart", json={"prompt": "Filing an FIR"})
    assert resp.status_code == 422
    assert resp.json()["detail"]["message"] == "Could not generate flowchart."

    fake_llm(flowchart, error="down")
    resp = client.post("/api/flowchart", json={"prompt": "Filing an FIR"})
    assert resp.status_code == 502
    assert resp.json()["detail"]["message"] == "Could not generate flowchart."


@pytest.mark.parametrize("module,path,body,message", [
    (legality, "/api/legality", {"description": "Oral lease"},
     "Failed to generate assessment. Please try again."),
    (penalty, "/api/penalty", {"offense": "Trespass"},
     "Failed to analyze penalty information. Please try again."),
    (judgment, "/api/judgment", {"case_description": "Wrongful termination"},
     "Failed to generate prediction. Please try again."),
])
def test_model_failure_messages(client, fake_llm, module, path, body, message):
    fake_llm(module, error="quota exceeded")
    resp = client.post(path, json=body)
    assert resp.status_code == 502
    assert resp.json()["detail"]["message"] == message
