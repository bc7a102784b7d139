# server/config.py

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv


logger = logging.getLogger("portfolio.config")

DEFAULT_JWT_SECRET = "change-me"


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration, loaded once at startup.
    """
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_expire_hours: int = 8
    admin_password: str | None = None
    database_path: Path = Path("data/portfolio.db")
    upload_dir: Path = Path("data/uploads")
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"


def load_settings() -> Settings:
    load_dotenv()

    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret:
        logger.warning("JWT_SECRET is not set, falling back to an insecure default secret")
        jwt_secret = DEFAULT_JWT_SECRET

    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    return Settings(
        jwt_secret=jwt_secret,
        jwt_expire_hours=int(os.getenv("JWT_EXPIRE_HOURS", "8")),
        admin_password=os.getenv("ADMIN_PASSWORD") or None,
        database_path=Path(os.getenv("DATABASE_PATH", "data/portfolio.db")),
        upload_dir=Path(os.getenv("UPLOAD_DIR", "data/uploads")),
        cors_origins=origins or ["*"],
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "4000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
