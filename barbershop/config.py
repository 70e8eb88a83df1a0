import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./barbershop.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Login gate (single administrator account)
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@admin.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
if not ADMIN_PASSWORD:
    import warnings

    warnings.warn(
        "ADMIN_PASSWORD not set! Using default admin credentials - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=2,
    )
    ADMIN_PASSWORD = "admin111"  # noqa: S105 - Dev fallback only
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
SESSION_TIMEOUT_HOURS = int(os.getenv("SESSION_TIMEOUT_HOURS", "24"))

# Date/time normalization
# "DMY" or "MDY" - applied only when both leading components are <= 12
DATE_ORDER = os.getenv("DATE_ORDER", "DMY").upper()
if DATE_ORDER not in ("DMY", "MDY"):
    import warnings

    warnings.warn(f"DATE_ORDER={DATE_ORDER} is not DMY or MDY! Using DMY", RuntimeWarning, stacklevel=2)
    DATE_ORDER = "DMY"
# Unrecognised time strings are kept as-is (logged) unless disabled
TIME_PASSTHROUGH = os.getenv("TIME_PASSTHROUGH", "true").lower() == "true"

# Response cache (Redis)
CACHE_ENABLED = os.getenv("CACHE_ENABLED", "true").lower() == "true"
CACHE_KEY_PREFIX = os.getenv("CACHE_KEY_PREFIX", "barbershop")
CACHE_TTL_RESERVATIONS = int(os.getenv("CACHE_TTL_RESERVATIONS", "30"))
CACHE_TTL_CLIENTS = int(os.getenv("CACHE_TTL_CLIENTS", "60"))
CACHE_TTL_SETTINGS = int(os.getenv("CACHE_TTL_SETTINGS", "300"))

# CSV import fallback file (used when the request carries no CSV body)
IMPORT_CSV_PATH = os.getenv("IMPORT_CSV_PATH", "Oraret.csv")

# Frontend base URL for CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
