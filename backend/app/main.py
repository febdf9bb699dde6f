"""VisaFlow - Employee Document Expiry Tracker API."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: Create tables and seed demo data
    from app.database import Base, engine, get_db_context
    from app.services.record_store import SqlRecordStore
    from app.services.seed_loader import load_seed_employees

    # Import all models so they're registered with Base
    from app import models  # noqa: F401

    # Create tables
    Base.metadata.create_all(bind=engine)

    if settings.seed_demo_data:
        with get_db_context() as db:
            load_seed_employees(SqlRecordStore(db))

    yield
    # Shutdown: cleanup if needed


app = FastAPI(
    title=settings.app_name,
    description="Track employee visa, health card and labour card expiries",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


# Import and include routers
from app.api import dashboard, data, employees, imports, notifications  # noqa: E402

app.include_router(employees.router, prefix="/api")
app.include_router(notifications.router, prefix="/api")
app.include_router(imports.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")
app.include_router(data.router, prefix="/api")
