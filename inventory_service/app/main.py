import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import init_db
from shared.data.seed_data import run_seed
from shared.exception_handler import setup_exception_handlers
from .router import (
    dashboard_router,
    export_router,
    items_router,
    settings_router,
    transactions_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_seed()
    yield


app = FastAPI(title=f"{settings.APP_NAME} API", lifespan=lifespan)

# Create all tables
init_db()

origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(items_router.router)
app.include_router(transactions_router.router)
app.include_router(settings_router.router)
app.include_router(dashboard_router.router)
app.include_router(export_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
