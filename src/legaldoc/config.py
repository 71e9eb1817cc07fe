import os

from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "").upper()

# --- LLM ---
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini").lower()
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
GEMINI_SCOPES = ("https://www.googleapis.com/auth/generative-language",)
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LLM_TIMEOUT_S = _float_env("LLM_TIMEOUT_S", 60.0)

# Maximum characters per prompt chunk.
CHUNK_SIZE = _int_env("CHUNK_SIZE", 8000)
LLM_MAX_ATTEMPTS = _int_env("LLM_MAX_ATTEMPTS", 3)
LLM_RETRY_DELAY_S = _float_env("LLM_RETRY_DELAY_S", 1.0)

# --- Storage ---
BUCKET_NAME = os.getenv("BUCKET_NAME", "").strip()
MAKE_PUBLIC = _bool_env("MAKE_PUBLIC", True)
LOCAL_STORAGE_DIR = os.getenv(
    "LOCAL_STORAGE_DIR", os.path.join(os.getcwd(), "permanent_storage")
)
DOWNLOADS_DIR = os.getenv("DOWNLOADS_DIR", os.path.join(os.getcwd(), "downloads"))
UPLOADS_DIR = os.getenv("UPLOADS_DIR", os.path.join(os.getcwd(), "uploads"))
LOCAL_URL_PREFIX = "/api/storage/local/"
PUBLIC_URL_TEMPLATE = "https://storage.googleapis.com/{bucket}/{object_name}"
METADATA_SUFFIX = ".meta.json"
