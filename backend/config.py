import os
from pydantic_settings import BaseSettings


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
    gemini_api_key: str = ""
    # Tried in order; later entries are used when earlier ones fail
    gemini_models: list[str] = [
        "gemini-1.5-flash",
        "gemini-1.5-pro",
        "gemini-1.0-pro",
    ]
    gemini_temperature: float = 0.0
    gemini_max_output_tokens: int = 2048

    # Retry policy for overloaded / unavailable model calls
    retry_max_attempts: int = 3
    retry_base_delay: float = 1.0  # seconds
    retry_max_delay: float = 30.0  # seconds

    max_upload_size_mb: int = 5
    max_photos: int = 6
    rate_limit: str = "20/minute"

    # Credit engine data sources (see services/scoring/registry.py)
    demand_source: str = "keyword"
    rarity_source: str = "none"

    cors_origins: list[str] = [
        "http://localhost:9002",
        "http://localhost:3000",
    ]
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
