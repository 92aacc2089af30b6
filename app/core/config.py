import os

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./event_registration.db")

# Redis configuration
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REGISTRATION_LOCK_ENABLED = os.getenv("REGISTRATION_LOCK_ENABLED", "true").lower() in ("1", "true", "yes")
REGISTRATION_LOCK_TIMEOUT = float(os.getenv("REGISTRATION_LOCK_TIMEOUT", "60"))
REGISTRATION_LOCK_BLOCKING_TIMEOUT = float(os.getenv("REGISTRATION_LOCK_BLOCKING_TIMEOUT", "5"))

# Application
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))


def get_database_url():
    return DATABASE_URL


def get_redis_url():
    return REDIS_URL
