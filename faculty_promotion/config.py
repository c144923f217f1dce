import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger("faculty_promotion")


# ===============================================
# Server Settings
# ===============================================

PORT = os.getenv("PORT", "3001")
HOST = os.getenv("HOST", "0.0.0.0")

# ===============================================
# CORS Configuration
# ===============================================

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3001",
]

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", ",".join(DEFAULT_CORS_ORIGINS)).split(",")
    if origin.strip()
]

# ===============================================
# Environment Validation
# ===============================================

def validate_environment():
    """Validate environment-driven settings."""
    if not PORT.isdigit():
        raise ValueError(
            f"PORT must be an integer, got {PORT!r}. "
            "Please fix it in the .env file or export a valid value."
        )
    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        raise ValueError(
            f"LOG_LEVEL {LOG_LEVEL!r} is not a known logging level."
        )
