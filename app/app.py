"""
FastAPI application — HTTP surface for the course-plan and lesson-chat pipelines.

Run:
    python -m app.app
or:
    uvicorn app.app:app --reload

Endpoints:
    POST /build-plan-spec
        body:    {"topic": "..."}            ("title" accepted as an alias)
        returns: {title, prompt, level, tags, topic, suggestions}
    POST /lesson-chat
        body:    {"question": "...", "lesson": {title, summary, contentMD, tips, miniChallenge}}
        returns: {answer, updatedLesson}
    GET /health

Errors come back as {"error": "<CODE or reason>"} with 400 or 500.
Responses carry permissive CORS headers. Logs go to stdout and logs/app.log
(rotating, 5 MB max, 3 backups).
"""

import asyncio
import logging
import logging.handlers
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from app import handlers
from tutor.config import get_settings
from tutor.provider import ModelProvider, OpenAICompatibleProvider

LOG_DIR  = Path(__file__).parent.parent / "logs"
LOG_FILE = LOG_DIR / "app.log"

def _setup_logging() -> None:
    LOG_DIR.mkdir(exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(message)s")

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    # Rotate at 5 MB, keep 3 backups
    rotating = logging.handlers.RotatingFileHandler(
        LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(stream)
    root.addHandler(rotating)

_setup_logging()
log = logging.getLogger("api")


# ---------------------------------------------------------------------------
# App + lifespan
# ---------------------------------------------------------------------------

_provider: ModelProvider | None = None


@asynccontextmanager
async def lifespan(_: FastAPI):
    global _provider

    settings = get_settings()
    log.info("Stage %s, model %s via %s", settings.stage, settings.model_id, settings.base_url)
    log.info("  Lesson chat format: %s (delimited fallback: %s)",
             settings.lesson_chat_format, settings.delimited_fallback)
    if not settings.api_key:
        log.warning("  No LLM API key configured; model calls will fail with MISSING_CREDENTIAL.")

    _provider = OpenAICompatibleProvider(settings)
    log.info("  Model provider ready.")

    yield  # server runs here


app = FastAPI(title="Course Tutor", lifespan=lifespan)


def get_provider() -> ModelProvider:
    global _provider
    if _provider is None:
        _provider = OpenAICompatibleProvider(get_settings())
    return _provider


def _to_response(envelope: dict[str, Any]) -> Response:
    headers = {
        k: (str(v).lower() if isinstance(v, bool) else str(v))
        for k, v in envelope["headers"].items()
        if k != "Content-Type"
    }
    return Response(
        content=envelope["body"],
        status_code=envelope["statusCode"],
        headers=headers,
        media_type=envelope["headers"].get("Content-Type", "application/json"),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.post("/build-plan-spec")
async def build_plan_spec(request: Request, provider: ModelProvider = Depends(get_provider)) -> Response:
    raw = await request.body()
    envelope = await run_in_threadpool(handlers.build_plan_spec, {"body": raw}, provider)
    return _to_response(envelope)


@app.post("/lesson-chat")
async def lesson_chat(request: Request, provider: ModelProvider = Depends(get_provider)) -> Response:
    raw = await request.body()
    envelope = await run_in_threadpool(handlers.lesson_chat, {"body": raw}, provider)
    return _to_response(envelope)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "stage": get_settings().stage}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _launch_server() -> None:
    config = uvicorn.Config(app, host="0.0.0.0", port=8000, reload=False)
    server = uvicorn.Server(config)

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        uvicorn.run(app, host="0.0.0.0", port=8000, reload=False)
        return

    log.warning(
        "Detected an existing asyncio event loop; serving with create_task() instead of asyncio.run()."
    )
    asyncio.create_task(server.serve())


if __name__ == "__main__":
    log.info("=== Course Tutor — launching server on http://0.0.0.0:8000 ===")
    _launch_server()
