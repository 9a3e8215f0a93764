# interview_coach/db/config.py
from __future__ import annotations
import os
from urllib.parse import quote_plus


def _build_db_url() -> str:
    if url := os.getenv("DATABASE_URL"):
        # Hosting platforms commonly provide postgres://, but SQLAlchemy asyncpg expects
        # postgresql+asyncpg://
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    user = os.getenv("DB_USER")
    password = os.getenv("DB_PASSWORD")
    host = os.getenv("DB_HOST")
    port = os.getenv("DB_PORT")
    name = os.getenv("DB_NAME")

    missing = [k for k, v in {
        "DB_USER": user,
        "DB_PASSWORD": password,
        "DB_HOST": host,
        "DB_PORT": port,
        "DB_NAME": name,
    }.items() if not v]

    if missing:
        raise RuntimeError(f"Missing environment variables: {', '.join(missing)}")

    return f"postgresql+asyncpg://{user}:{quote_plus(password)}@{host}:{port}/{name}"


DATABASE_URL: str = _build_db_url()
