import fcntl
import logging
import os
import time
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_api.config import settings
from task_api.exceptions import KIND_BY_STATUS, TaskManagerError, ValidationFailed
from task_api.logging_config import setup_logging
from task_api.routers.tasks import router as tasks_router
from task_api.routers.users import router as users_router
from task_api.routers.auth import router as auth_router

from task_api.services.scheduler import setup_scheduler

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Only the first worker to grab the lock runs the scheduler.
    lock_file = "/tmp/task_api_scheduler.lock"
    lock_fd = None
    scheduler = None

    try:
        lock_fd = open(lock_file, "w")
        fcntl.flock(lock_fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        logger.info("[PROCESS %s] Acquired scheduler lock. Starting APScheduler...", os.getpid())
        scheduler = setup_scheduler()
    except OSError:
        logger.info("[PROCESS %s] Another worker is running the scheduler. Skipping.", os.getpid())
        if lock_fd:
            lock_fd.close()
            lock_fd = None

    yield

    if scheduler:
        scheduler.shutdown(wait=False)
    if lock_fd:
        fcntl.flock(lock_fd, fcntl.LOCK_UN)
        lock_fd.close()


app = FastAPI(
    lifespan=lifespan,
    title="Task Manager API",
    description="Personal task management with filtering, dashboard & daily digests",
    version="1.0.0",
)

# Enable CORS for the frontend
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex="https?://.*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration = (time.perf_counter() - start) * 1000
    logger.info("%s %s | %s | %.0fms", request.method, request.url.path, response.status_code, duration)
    return response


def error_response(status_code: int, kind: str, message: str, exc: Exception, headers=None) -> JSONResponse:
    stack = None if settings.is_production else "".join(traceback.format_exception(exc))
    return JSONResponse(
        status_code=status_code,
        content={"kind": kind, "message": message, "stack": stack},
        headers=headers,
    )


@app.exception_handler(TaskManagerError)
async def task_manager_error_handler(request: Request, exc: TaskManagerError):
    return error_response(exc.status_code, exc.kind, exc.message, exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in exc.errors()
    )
    return error_response(400, ValidationFailed.kind, message, exc)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    kind = KIND_BY_STATUS.get(exc.status_code, "Error")
    return error_response(exc.status_code, kind, str(exc.detail), exc, headers=getattr(exc, "headers", None))


# Catch-all so unexpected failures still return JSON
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "ServerError", "Internal Server Error", exc)

app.include_router(tasks_router)
app.include_router(users_router)
app.include_router(auth_router)

@app.get("/")
def root():
    return {"message": "Task Manager API running"}
