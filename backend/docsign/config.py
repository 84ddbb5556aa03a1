import json
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS
    # Accepts FRONTEND_ORIGIN, or FRONTEND_URL for older deployments.
    # IMPORTANT: kept as a raw string so a comma-separated value never goes
    # through pydantic-settings "complex" (json.loads) env parsing.
    frontend_origin: str = Field(
        default="http://localhost:5173",
        validation_alias=AliasChoices("frontend_origin", "frontend_url"),
    )

    # Upload cap (bytes), applied to the request body and the decoded PDF
    max_body_size: int = 50 * 1024 * 1024

    # Storage
    storage_root: str = "uploads"
    uploads_url_prefix: str = "/uploads"

    # Transform worker pool
    transform_timeout_seconds: float = 30.0
    transform_workers: int = 4

    # Logging
    log_level: str = "INFO"

    # Flask environment
    flask_env: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def is_dev(self) -> bool:
        """True when running in development mode."""
        return (self.flask_env or "").strip().lower() == "development"

    def get_cors_origins(self) -> list[str]:
        """Return the allowed CORS origins.

        Parsing rules:
        - None/empty/whitespace -> []
        - JSON list string (starts with '[') -> parsed list
        - otherwise -> comma-separated list
        """
        return self._parse_origins(self.frontend_origin)

    @staticmethod
    def _parse_origins(raw_value: Any) -> list[str]:
        if raw_value is None:
            return []

        raw = str(raw_value).strip()
        if not raw:
            return []

        items: list[Any]

        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError:
                parsed = None

            if isinstance(parsed, list):
                items = parsed
            else:
                # Looks like JSON but isn't; split the bracket contents instead.
                stripped = raw[1:-1] if raw.endswith("]") else raw[1:]
                items = stripped.split(",")
        else:
            items = raw.split(",")

        origins: list[str] = []
        for item in items:
            if item is None:
                continue
            origin = str(item).strip().strip('"').rstrip("/")
            if origin:
                origins.append(origin)
        return origins


settings = Settings()
