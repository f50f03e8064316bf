import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# "development", "production" or "test"
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
IS_PRODUCTION = ENVIRONMENT == "production"
PORT = int(os.getenv("PORT", "3001"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./shiftsync.db")

# JWT signing - CRITICAL: must be at least 32 characters in production
JWT_SECRET = os.getenv("JWT_SECRET")
JWT_MIN_SECRET_LENGTH = 32
if not JWT_SECRET or len(JWT_SECRET) < JWT_MIN_SECRET_LENGTH:
    if IS_PRODUCTION:
        raise RuntimeError(
            f"JWT_SECRET must be set to at least {JWT_MIN_SECRET_LENGTH} characters in production"
        )

    import warnings

    warnings.warn(
        f"JWT_SECRET missing or shorter than {JWT_MIN_SECRET_LENGTH} characters! "
        "Using insecure default - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=2,
    )
    JWT_SECRET = "INSECURE-DEV-JWT-SECRET-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only
JWT_ALGORITHM = "HS256"
JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", "7"))

# CORS - the React dev server by default
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"

API_VERSION = "1.0.0"
