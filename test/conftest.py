"""
Test Configuration and Fixtures

This module provides:
- Environment setup (SQLite database file, admin secret, console email)
- Dependency injection wiring shared by integration and API tests
- Per-test schema reset on the SQLite database

Architecture:
- Unit tests (test/**/unit/): construct use cases with fakes, never touch the DB
- Integration tests (test/**/integration/): real SQLite via aiosqlite + the HTTP API
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time of src.platform.config.core_setting
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_dir = Path(tempfile.mkdtemp(prefix=f'consultation_{worker_id}_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_dir / "consultation_test.db"}'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['ADMIN_SECRET'] = 'test-admin-secret'
    os.environ['EMAIL_PROVIDER'] = 'console'
    os.environ['MAX_SLOTS_PER_MONTH'] = '5'
    os.environ['BOOKING_DURATIONS'] = '30,45,60'
    os.environ['BUSINESS_TIMEZONE'] = 'Europe/Berlin'
    os.environ['DB_AUTO_CREATE_TABLES'] = 'false'
    os.environ['NOTIFICATION_TIMEOUT_SECONDS'] = '2'
    os.environ['OPERATOR_EMAIL'] = 'operator@example.com'
    os.environ.pop('OTEL_EXPORTER_OTLP_ENDPOINT', None)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncIterator, Iterator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402

from src.platform.app_factory import create_app  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.database.db_setting import Base, dispose_engine, get_engine  # noqa: E402
from src.service.consultation.driven_adapter.notification.console_email_notifier import (  # noqa: E402
    ConsoleEmailNotifier,
)
import src.service.consultation.driven_adapter.model  # noqa: E402, F401


ADMIN_SECRET = 'test-admin-secret'


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Mark tests by directory so `-m unit` / `-m integration` select them."""
    for item in items:
        path = str(item.fspath)
        if '/unit/' in path or '\\unit\\' in path:
            item.add_marker(pytest.mark.unit)
        elif '/integration/' in path or '\\integration\\' in path:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Dependency Injection
# =============================================================================
@pytest.fixture(scope='session', autouse=True)
def wired_container() -> Iterator[None]:
    """Lifespan does not run under ASGITransport, so wire once for the session."""
    container.wire(modules=WIRE_MODULES)
    yield
    container.unwire()


@pytest.fixture
def email_outbox() -> Iterator[ConsoleEmailNotifier]:
    """The console notifier the container hands out, emptied for each test."""
    notifier = container.email_notifier()
    assert isinstance(notifier, ConsoleEmailNotifier)
    notifier.sent_emails.clear()
    notifier.sent_at.clear()
    yield notifier
    notifier.sent_emails.clear()
    notifier.sent_at.clear()


# =============================================================================
# Database
# =============================================================================
@pytest.fixture
async def database() -> AsyncIterator[None]:
    """Fresh schema for every test; the engine is bound to the test's event loop."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await dispose_engine()


@pytest.fixture
async def client(
    database: None, email_outbox: ConsoleEmailNotifier
) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(title_suffix=' (Test)')
    # 500 paths are asserted on, so app exceptions must surface as responses
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url='http://test') as http_client:
        yield http_client


@pytest.fixture
def admin_secret() -> str:
    return ADMIN_SECRET


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {'Authorization': f'Bearer {ADMIN_SECRET}'}
