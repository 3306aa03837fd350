# station_export/config.py
from pydantic_settings import BaseSettings
from pathlib import Path
from pydantic import field_validator

class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Environment
    environment: str = "development"  # development, production
    service_name: str = "station-export"

    # Logging
    log_dir: Path = Path("logs")
    log_to_file: bool = False  # stdout only unless explicitly enabled
    log_level: str = "INFO"

    # ===== EXPORT SETTINGS =====
    # Reject markup above this size before parsing (HTTP 413)
    max_html_chars: int = 5_000_000
    # Format used by the CLI when --format is not given
    default_export_format: str = "pdf"

    # CORS
    cors_origins: list[str] = ["http://localhost:1420"]
    @field_validator("cors_origins", mode="before")
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            import json
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [v]
        return v

    class Config:
        env_file = Path(__file__).resolve().parent.parent / ".env"
        case_sensitive = False
        extra = "ignore"  # Allow future env vars without breaking startup

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

# Global settings instance
settings = Settings()
