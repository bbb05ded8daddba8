# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import init_db
from app.routers import schedules, blocks, timetable
from app.utils.exceptions import ScheduleValidationError

import time
import logging
from app.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 建立資料表（若不存在）
    init_db()
    yield


app = FastAPI(title="Schedule Builder Backend", version="1.0.0", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


@app.exception_handler(ScheduleValidationError)
async def schedule_validation_error_handler(request: Request, exc: ScheduleValidationError):
    logger.warning("validation error %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=list(dict.fromkeys(settings.CORS_ORIGINS + [settings.FRONTEND_BASE_URL])),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(schedules.router)
app.include_router(blocks.router)
app.include_router(timetable.router)

@app.get("/")
def root():
    return {"message": "Schedule builder backend is running!"}
