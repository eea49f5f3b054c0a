# sitegen/config.py
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_PORT = 3001
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_MODEL = "codellama"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_BODY_BYTES = 2 * 1024 * 1024


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


class Settings(BaseModel):
    """Relay configuration, built once at startup and handed to `create_app`."""

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    ollama_base_url: str = DEFAULT_OLLAMA_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    # None leaves the outbound call without a timeout.
    backend_timeout: Optional[float] = None
    cors_origins: List[str] = ["*"]
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    log_level: str = "INFO"

    @property
    def generate_url(self) -> str:
        return f"{self.ollama_base_url.rstrip('/')}/api/generate"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        origins = [o.strip() for o in (os.getenv("CORS_ORIGINS") or "*").split(",") if o.strip()]
        return cls(
            host=os.getenv("HOST") or "127.0.0.1",
            port=_env_int("PORT", DEFAULT_PORT),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL") or DEFAULT_OLLAMA_BASE_URL,
            model=os.getenv("OLLAMA_MODEL") or DEFAULT_MODEL,
            temperature=_env_float("OLLAMA_TEMPERATURE", DEFAULT_TEMPERATURE),
            backend_timeout=_env_float("OLLAMA_TIMEOUT", None),
            cors_origins=origins or ["*"],
            max_body_bytes=_env_int("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
