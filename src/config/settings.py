"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Fuzzy classification ---
FUZZY_PROJECT_SIMILARITY_THRESHOLD: float = float(
    os.getenv("FUZZY_PROJECT_SIMILARITY_THRESHOLD", "0.75")
)
FUZZY_PRIORITY_SIMILARITY_THRESHOLD: float = float(
    os.getenv("FUZZY_PRIORITY_SIMILARITY_THRESHOLD", "0.80")
)
FUZZY_BUG_TYPE_SIMILARITY_THRESHOLD: float = float(
    os.getenv("FUZZY_BUG_TYPE_SIMILARITY_THRESHOLD", "0.80")
)
FUZZY_ENABLE_LOGGING: bool = os.getenv("FUZZY_ENABLE_LOGGING", "true").lower() == "true"

# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
MAX_BODY_LOG_CHARS: int = int(os.getenv("MAX_BODY_LOG_CHARS", "500"))
