"""Central configuration for post_summarizer."""
import os
from pathlib import Path
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(PROJECT_ROOT / ".env")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list:
    return [s.strip() for s in os.getenv(name, default).split(",") if s.strip()]


# HTTP service
PORT = int(os.getenv("PORT", "4000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
MAX_INPUT_LENGTH = int(os.getenv("MAX_INPUT_LENGTH", "4000"))
ALLOWED_ORIGINS = _env_list("AUTH_ALLOWED_ORIGINS", "*")

# Model summarizer
SUMMARIZER_MODE = os.getenv("SUMMARIZER_MODE", "").strip().lower()
TRANSFORMERS_DISABLED = _env_bool("SUMMARIZER_TRANSFORMERS_DISABLED")
FAST_MODEL = os.getenv("SUMMARIZER_FAST_MODEL", "google/pegasus-xsum")
BEST_MODEL = os.getenv("SUMMARIZER_BEST_MODEL", "facebook/bart-large-cnn")
DEFAULT_MODEL = os.getenv("SUMMARIZER_MODEL", FAST_MODEL)
FAST_MODEL_CANDIDATES = _env_list(
    "SUMMARIZER_FAST_MODEL_CANDIDATES",
    f"{FAST_MODEL},sshleifer/distilbart-cnn-12-6,sshleifer/distilbart-cnn-6-6,t5-small",
)

# Seconds before a failed model pipeline is tried again
TRANSFORMER_RETRY_DELAY = float(os.getenv("TRANSFORMER_RETRY_DELAY", "300"))
