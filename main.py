"""Application entry point for the weight-coaching forms service.

Defines the FastAPI app, middleware and exception handlers, and includes
the form routers from the `api` package. The `lifespan` handler creates
missing tables on startup.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import init_db, models
from database.deps import get_db_read
from core.exceptions import DatabaseError
from core.logger import get_logger
from core.error_handlers import register_exception_handlers
from api.profiles import router as profiles_router
from api.check_ins import router as check_ins_router
from api.contact import router as contact_router
from api.validation import router as validation_router

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fastapi lifespan context: initialize resources before serving requests."""
    init_db()
    yield


app = FastAPI(title="Weight Coaching Forms API", version="1.0.0", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise


@app.get("/health")
def health(db: Session = Depends(get_db_read)):
    """Return basic health status and database connectivity.

    Raises:
        DatabaseError: If database connection fails.
    """
    try:
        _ = db.query(models.Profile.id).first()
        return {"status": "healthy", "database": "connected"}
    except SQLAlchemyError as exc:
        logger.exception("Health check failed")
        raise DatabaseError("Database health check failed", operation="health") from exc


app.include_router(profiles_router)
app.include_router(check_ins_router)
app.include_router(contact_router)
app.include_router(validation_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
