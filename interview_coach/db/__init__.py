"""
Re-exports for convenient imports:

    from interview_coach.db import Base, get_db, engine, async_session
"""
from .base import Base            # noqa: F401
from .session import get_db, engine, async_session, init_models   # noqa: F401
