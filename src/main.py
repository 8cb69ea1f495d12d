"""
Production FastAPI Application

API plus the optional periodic lifecycle sweep.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Booking Service] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Booking Service] Dependency injection wired')

    if settings.AUTO_CREATE_TABLES:
        await create_db_and_tables()

    async with anyio.create_task_group() as tg:
        if settings.LIFECYCLE_SWEEP_INTERVAL_SECONDS > 0:
            tg.start_soon(
                container.lifecycle_sweeper().run_periodically,
                settings.LIFECYCLE_SWEEP_INTERVAL_SECONDS,
            )

        Logger.base.info('✅ [Booking Service] Ready to serve requests')
        yield

        Logger.base.info('🛑 [Booking Service] Shutting down...')
        tg.cancel_scope.cancel()

    await dispose_engine()
    Logger.base.info('🗄️ [Booking Service] Database engine disposed')

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Booking Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
