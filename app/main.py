# app/main.py
# -----------------------------------------------------------------------------
# FastAPI entrypoint
# - creates tables on startup
# - /health reports how many searches were served from mock venues
# -----------------------------------------------------------------------------
from fastapi import FastAPI

from app.core.config import settings
from app.core.logging import logger
from app.db.session import init_models
from app.routers import groups, venues
from app.services.venue_search import venue_search_service

app = FastAPI(title=settings.APP_NAME)


@app.on_event("startup")
async def on_startup():
    await init_models()
    logger.info(f"{settings.APP_NAME} started (env={settings.ENV})")


app.include_router(venues.router)
app.include_router(groups.router)


@app.get("/health")
async def health():
    return {"status": "ok", "venue_fallbacks": venue_search_service.fallback_count}
