import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.routers import users, sessions
from api.errors import add_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from config.settings import settings
from database.core import engine
from database.models import Base

API_PREFIX = "/api/v1"

logger = logging.getLogger("time_tracker.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_AUTOMIGRATE:
        logger.info("migrating database")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info(f"starting server on {settings.HTTP_HOST}:{settings.HTTP_PORT}")
    yield
    logger.info("disconnect from database")
    await engine.dispose()


app = FastAPI(
    title="Time Tracker",
    description="Web API - Time Tracker",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins_list,
    allow_credentials="*" not in settings.origins_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(users.router, prefix=API_PREFIX)
app.include_router(sessions.router, prefix=API_PREFIX)

@app.get(f"{API_PREFIX}/status", tags=["api"])
async def status():
    return {"status": "OK"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HTTP_HOST, port=settings.HTTP_PORT)
