from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pistatus.api.routes import router
from pistatus.config import settings
from pistatus.engine import StatusEngine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── startup ───────────────────────────────────────
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.state.engine = StatusEngine.from_settings(settings)
    logger.info("%s started (cache_ttl=%.1fs)", settings.app_name, settings.cache_ttl)

    yield

    # ── shutdown ──────────────────────────────────────
    logger.info("%s shut down", settings.app_name)


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(router)
