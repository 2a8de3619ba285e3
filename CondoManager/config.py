"""
Configuration module for CondoManager.

This module resolves environment configuration for the database connection,
the session cookie and the HTTP listener. Two sets of database variable names
are in use across deployments (``RDS_*`` on the managed host, ``DB_*``
locally); both collapse into a single ``DatabaseSettings`` object.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel
from sqlalchemy.engine import URL, make_url

from CondoManager.constants import SESSION_MAX_AGE

logger = logging.getLogger(__name__)

LOCAL_HOSTS = ("localhost", "127.0.0.1")
DEFAULT_SESSION_SECRET = "dev_secret_key"


def load_env() -> None:
    """
    Load environment variables for local development.

    Prefer `.env.development` in the project root and fall back to `.env`.
    Variables already present in the process environment are never
    overwritten.
    """
    root = Path(__file__).resolve().parents[1]
    dev_env = root / ".env.development"
    default_env = root / ".env"
    if dev_env.exists():
        load_dotenv(dev_env)
    elif default_env.exists():
        load_dotenv(default_env)


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


class DatabaseSettings(BaseModel):
    """
    Resolved database connection settings.

    Attributes:
        url (str): A full connection URL, when one was supplied directly.
        host (str): Database host name.
        port (int): Database port.
        user (str): Login role.
        password (str): Login password.
        name (str): Database name.
    """
    url: Optional[str] = None
    host: str = "localhost"
    port: int = 5432
    user: Optional[str] = None
    password: Optional[str] = None
    name: str = "condo_manager"

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """
        Build settings from the process environment.

        Resolution order: `DATABASE_URL` / `HEROKU_DATABASE_URL`, then the
        `RDS_*` names, then the `DB_*` names, then defaults.
        """
        url = _first_env("DATABASE_URL", "HEROKU_DATABASE_URL")
        if url and url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return cls(
            url=url,
            host=_first_env("RDS_HOSTNAME", "DB_HOST") or "localhost",
            port=int(_first_env("RDS_PORT", "DB_PORT") or 5432),
            user=_first_env("RDS_USERNAME", "DB_USER"),
            password=_first_env("RDS_PASSWORD", "DB_PASSWORD"),
            name=_first_env("RDS_DB_NAME", "DB_NAME") or "condo_manager",
        )

    @property
    def is_local(self) -> bool:
        host = make_url(self.url).host if self.url else self.host
        return host is None or host in LOCAL_HOSTS

    def sqlalchemy_url(self):
        if self.url:
            return self.url
        return URL.create(
            "postgresql+psycopg2",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.name,
        )

    def connect_args(self) -> Dict[str, object]:
        """
        Driver arguments for the engine.

        Local hosts connect without SSL; anything else requires an encrypted
        connection without verifying the server certificate.
        """
        target = str(self.url or "")
        if target.startswith("sqlite"):
            return {"check_same_thread": False}
        if "sslmode=" in target:
            return {}
        return {"sslmode": "disable" if self.is_local else "require"}


class AppSettings(BaseModel):
    """
    HTTP-level settings.

    Attributes:
        session_secret (str): Key used to sign the session cookie.
        session_cookie (str): Name of the session cookie.
        session_max_age (int): Seconds before a login expires.
        port (int): Port the development server listens on.
        log_level (str): Root logging level.
    """
    session_secret: str = DEFAULT_SESSION_SECRET
    session_cookie: str = "condo_session"
    session_max_age: int = SESSION_MAX_AGE
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppSettings":
        settings = cls(
            session_secret=os.getenv("SESSION_SECRET") or DEFAULT_SESSION_SECRET,
            session_cookie=os.getenv("SESSION_COOKIE") or "condo_session",
            session_max_age=int(os.getenv("SESSION_MAX_AGE") or SESSION_MAX_AGE),
            port=int(os.getenv("PORT") or 3000),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
        if settings.session_secret == DEFAULT_SESSION_SECRET:
            logger.warning("SESSION_SECRET is not set; using the development default")
        return settings
