"""
API gateway application.

FastAPI app exposing the video generation control endpoints.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import settings
from shared.database import get_database
from api_gateway.routes import videos

app = FastAPI(title="Listing Video Orchestrator", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(videos.router, prefix="/api/ai/videos", tags=["videos"])


@app.get("/health")
async def health_check() -> dict:
    database_ok = await get_database().health_check()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": database_ok,
        "environment": settings.environment,
    }
