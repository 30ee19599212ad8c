"""StudyFlow Planner: FastAPI app creation, middleware, error mapping."""

import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from server.config import ALLOWED_ORIGINS, APP_VERSION, LOG_LEVEL
from planner.errors import EmptyInputError, InvalidRangeError
from brain.errors import UpstreamUnavailableError

from planner.routes import router as planner_router
from brain.routes import router as brain_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="StudyFlow Planner API", version=APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── Error mapping ───────────────────────────────────────────
@app.exception_handler(EmptyInputError)
@app.exception_handler(InvalidRangeError)
async def allocation_input_error(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(UpstreamUnavailableError)
async def upstream_unavailable(request: Request, exc: UpstreamUnavailableError):
    logger.error(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc)})


# ─── API routes ──────────────────────────────────────────────
app.include_router(planner_router, tags=["planner"])
app.include_router(brain_router, tags=["brain"])


@app.get("/health")
def health_check():
    return {"status": "ok", "version": APP_VERSION}
