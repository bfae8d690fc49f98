from fastapi import FastAPI, Request
import logging
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from promotion.core.config import settings
from promotion.core.database import init_db, import_models
from promotion.core.broadcaster import draft_broadcaster, notification_broadcaster
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError, BusinessRuleError, NarrationError
from promotion.core.scheduler import start_scheduler
from promotion.api import api_router
import promotion.listeners  # noqa: F401

# Setup logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

import_models()

app = FastAPI(title="Wrestling Promotion Manager")
scheduler = None

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(EntityNotFoundError)
async def not_found_handler(request: Request, exc: EntityNotFoundError):
    return _error(404, exc)


@app.exception_handler(DuplicateEntityError)
async def duplicate_handler(request: Request, exc: DuplicateEntityError):
    return _error(409, exc)


@app.exception_handler(BusinessRuleError)
async def business_rule_handler(request: Request, exc: BusinessRuleError):
    return _error(400, exc)


@app.exception_handler(IntegrityError)
async def integrity_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=409, content={"detail": "Request conflicts with existing data"})


@app.exception_handler(NarrationError)
async def narration_handler(request: Request, exc: NarrationError):
    logger.warning(f"Narration failed: {exc}")
    return _error(502, exc)


# Ensure database tables are created
@app.on_event("startup")
async def startup():
    global scheduler
    try:
        init_db()
        logger.info("✅ Database connected and tables created.")
        if settings.SCHEDULER_ENABLED:
            scheduler = start_scheduler()
            logger.info("⏰ Scheduler started.")
    except Exception as e:
        logger.error(f"❌ Startup error: {e}")


@app.on_event("shutdown")
async def shutdown():
    if scheduler is not None:
        scheduler.shutdown(wait=False)
    draft_broadcaster.shutdown(wait=False)
    notification_broadcaster.shutdown(wait=False)


@app.get("/")
async def home():
    return {"message": "Welcome to the Wrestling Promotion Manager"}

# Include all API routes
app.include_router(api_router)
