import logging
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
    gemini_model: str = "gemini-2.5-flash"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"

    # Career path pipeline policy (see models.schemas.policy.PipelinePolicy)
    max_generation_attempts: int = 3
    generation_timeout_seconds: float = 45.0
    min_stages: int = 4
    min_description_length: int = 10  # relaxed from 15, over-rejected valid paths
    keyword_reduction_factor: float = 0.7  # 30% more lenient than domain default
    title_similarity_threshold: float = 0.6

    @property
    def effective_log_level(self) -> int:
        """DEBUG when the debug flag is set, otherwise the configured level."""
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level.upper(), logging.INFO)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
