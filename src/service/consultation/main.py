"""
Consultation Service - Main Application
Handles free consultation bookings, slot administration and verified reviews.

Run: uvicorn src.service.consultation.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Consultation Service] Starting up...')

    tracing = TracingConfig(service_name='consultation-service')
    tracing.setup()
    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('📊 [Consultation Service] OpenTelemetry tracing configured')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Consultation Service] Dependency injection wired')

    if settings.DB_AUTO_CREATE_TABLES:
        await create_db_and_tables()
        Logger.base.info('🗄️ [Consultation Service] Tables ensured (create_all)')

    if not settings.ADMIN_SECRET.get_secret_value():
        Logger.base.warning(
            '⚠️ [Consultation Service] ADMIN_SECRET is empty, admin actions disabled'
        )

    Logger.base.info(
        f'✅ [Consultation Service] Startup complete '
        f'(max {settings.MAX_SLOTS_PER_MONTH} slots/month, email={settings.EMAIL_PROVIDER})'
    )

    yield

    Logger.base.info('🛑 [Consultation Service] Shutting down...')

    await dispose_engine()
    Logger.base.info('🗄️ [Consultation Service] Database engine disposed')

    tracing.shutdown()
    container.unwire()
    cleanup()

    Logger.base.info('👋 [Consultation Service] Shutdown complete')


app = create_app(lifespan=lifespan)
