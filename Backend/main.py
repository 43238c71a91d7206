from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from mangum import Mangum

from agents.image_query_agent.dependencies import get_mode
from config.logger import setup_logging
from config.settings import get_settings

settings = get_settings()

# Routers
from routes import (
    analyze_images,
    health
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION} in {get_mode().value} mode")

    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"message": f"{settings.APP_NAME} is running"}


# Register routes
app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(analyze_images.router, prefix="/api", tags=["Image Analysis"])

# handler for AWS
handler = Mangum(app)

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=settings.APP_PORT)
