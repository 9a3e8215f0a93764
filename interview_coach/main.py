# interview_coach/main.py
"""
FastAPI backend for interview practice: document upload, question generation,
interview sessions and LLM feedback on the answers.
"""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_allowed_origins, get_llm_settings, get_log_level
from .db.session import engine, init_models
from .errors import AppError, app_error_handler, global_exception_handler
from .llm.client import build_llm_client
from .routers import auth, documents, feedback, interviews, users

# ───────────────────────── logging ──────────────────────────────────────────
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=get_log_level(),
)
logger = logging.getLogger(__name__)


# ───────────────────────── lifespan ─────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Creates missing tables and picks the LLM collaborator once per process."""
    await init_models()
    app.state.llm_client = build_llm_client(get_llm_settings())
    logger.info("Interview Coach backend started")
    yield
    await engine.dispose()
    logger.info("Interview Coach backend shut down")


# ───────────────────────── FastAPI app ──────────────────────────────────────
app = FastAPI(title="Interview Coach API", lifespan=lifespan)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(documents.router)
app.include_router(interviews.router)
app.include_router(feedback.router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(Exception, global_exception_handler)


# ───────────────────────── routes ───────────────────────────────────────────
@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


# ───────────────────────── dev entrypoint ───────────────────────────────────
if __name__ == "__main__":
    import uvicorn

    host, port = "0.0.0.0", 8000
    logger.info("Starting dev server on http://%s:%d", host, port)
    uvicorn.run("interview_coach.main:app", host=host, port=port, reload=True)
