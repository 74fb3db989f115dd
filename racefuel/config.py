from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional


def _env_flag(name: str, default: str = "") -> bool:
    return (os.environ.get(name) or default).strip() in {"1", "true", "True", "yes"}


class Settings:
    """Centralized configuration for the RaceFuel API."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        self.data_root: Path = Path(
            os.environ.get("RACEFUEL_DATA_ROOT") or (repo_root / "data")
        ).expanduser()
        self.database_url: str = (
            os.environ.get("RACEFUEL_DATABASE_URL")
            or f"sqlite:///{self.data_root / 'racefuel.db'}"
        )
        self.db_echo: bool = _env_flag("RACEFUEL_DB_ECHO")

        # The identity provider signs tokens with this secret. In production you MUST set
        # RACEFUEL_JWT_SECRET; the fallback only keeps local development easy.
        self.jwt_secret: str = os.environ.get("RACEFUEL_JWT_SECRET") or "dev-secret-change-me"
        self.jwt_issuer: Optional[str] = os.environ.get("RACEFUEL_JWT_ISSUER") or None
        self.jwt_audience: Optional[str] = os.environ.get("RACEFUEL_JWT_AUDIENCE") or None
        self.token_ttl_days: int = int(os.environ.get("RACEFUEL_TOKEN_TTL_DAYS") or "7")

        self.expose_error_details: bool = _env_flag("RACEFUEL_EXPOSE_ERROR_DETAILS", "1")
        self.log_level: str = (os.environ.get("RACEFUEL_LOG_LEVEL") or "INFO").upper()

        self.host: str = os.environ.get("RACEFUEL_HOST") or os.environ.get("HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("RACEFUEL_PORT") or os.environ.get("PORT") or "8000")

        cors = os.environ.get("RACEFUEL_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
