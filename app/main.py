"""ClarityEd Attendance - FastAPI entrypoint."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import ServerSelectionTimeoutError

from app.config import settings
from app.db import db_shutdown, db_startup
from app.seed import seed_admin
from app.api import auth, attendance, settings as settings_api, dashboard, alerts

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await db_startup()
        await seed_admin()
    except ServerSelectionTimeoutError as e:
        logger.error(
            "MongoDB is not running. Start it with: docker compose up -d (from project root)"
        )
        raise RuntimeError(
            "MongoDB connection failed. Start MongoDB (e.g. docker compose up -d)."
        ) from e
    yield
    await db_shutdown()


app = FastAPI(
    title=settings.app_name,
    description="Attendance analytics, thresholds and student alerts for school staff",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors},
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance"])
app.include_router(settings_api.router, prefix="/api/settings", tags=["Settings"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(alerts.router, prefix="/api/alerts", tags=["Student Alerts"])


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.app_name}
