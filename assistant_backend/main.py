"""
Assistant Backend - FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import agent, config, stream
from .services.config_manager import ConfigManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    config_manager = ConfigManager.get_instance()
    level = config_manager.get_config().get("logging", {}).get("level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Starting Assistant Backend...")

    yield
    logger.info("Shutting down Assistant Backend...")


app = FastAPI(
    title="Assistant Backend",
    description="Agent stream decoding, file materialization and request planning",
    version="1.0.0",
    lifespan=lifespan,
)

# Browser client runs on a different origin in development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(agent.router, prefix="/api/agent", tags=["agent"])
app.include_router(stream.router, prefix="/api/stream", tags=["stream"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "assistant-backend"}


def run():
    import uvicorn

    server = ConfigManager.get_instance().get_config().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=server.get("port", 8000))


if __name__ == "__main__":
    run()
