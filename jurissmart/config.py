from __future__ import annotations

import os
from dotenv import load_dotenv

# Load .env once
load_dotenv()

# Models / knobs
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")
DEFAULT_GOOGLE_MODEL = os.getenv("GOOGLE_MODEL", "gemini-2.0-flash")
ANALYSIS_GOOGLE_MODEL = os.getenv("ANALYSIS_GOOGLE_MODEL", "gemini-1.5-pro")
DEFAULT_MODEL_TEMPERATURE = float(os.getenv("MODEL_TEMPERATURE", "0.0"))

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./jurissmart.db")
SIGNUP_MAX_RETRIES = int(os.getenv("SIGNUP_MAX_RETRIES", "3"))
SIGNUP_RETRY_DELAY = float(os.getenv("SIGNUP_RETRY_DELAY", "1.0"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

# Server
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ALLOW_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
