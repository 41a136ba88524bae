# path: skate-spot-api/app/main.py

import logging

from fastapi import FastAPI

from app.config import get_settings
from app.api.routes.sessions import router as sessions_router
from app.api.routes.spots import router as spots_router

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title=settings.app_name)

app.include_router(spots_router)
app.include_router(sessions_router)
