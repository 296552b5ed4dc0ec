import os
from dotenv import load_dotenv

# Load .env as soon as this module is imported (safe to call multiple times)
load_dotenv()

MAX_TEXT_CHARS: int = int(os.getenv("MAX_TEXT_CHARS", "100000"))
DEFAULT_MODEL: str = os.getenv("DEFAULT_MODEL", "ClinicalBERT")
DEFAULT_THRESHOLD: float = float(os.getenv("DEFAULT_THRESHOLD", "0.5"))
MAX_BATCH_DOCUMENTS: int = int(os.getenv("MAX_BATCH_DOCUMENTS", "50"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
HOST: str = os.getenv("HOST", "127.0.0.1")
PORT: int = int(os.getenv("PORT", "8000"))
