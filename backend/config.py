import os
from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_REFERENCE_DATA = Path(__file__).resolve().parent / "services" / "data" / "reference_v1.yaml"


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"
    rate_limit: str = "30/minute"

    # Versioned market tables; swap the file to recalibrate without a code change
    reference_data_path: str = str(DEFAULT_REFERENCE_DATA)
    report_version: str = "1.0"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
