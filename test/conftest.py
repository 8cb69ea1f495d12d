"""
Test Configuration and Fixtures

This module provides:
- Environment setup (SQLite database file, test log directory) before app imports
- Schema creation once per session and table cleanup between integration tests
- A session-scoped TestClient and helpers for users with each role

Architecture:
- Unit tests (`@pytest.mark.unit`): fake repositories, never touch the database
- Integration tests: real repositories against the SQLite test database
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time by src.platform.config.core_setting
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_dir = Path(__file__).parent

    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_file = test_dir / f'event_booking_test_{worker_id}.db'
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_file}'
    os.environ['TEST_DB_FILE'] = str(db_file)

    test_log_dir = test_dir / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['AUTO_CREATE_TABLES'] = 'false'
    os.environ['LIFECYCLE_SWEEP_INTERVAL_SECONDS'] = '0'
    os.environ.setdefault('ADMIN_SECRET', 'test_admin_secret')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import delete  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.database.orm_db_setting import Base  # noqa: E402
from test.shared.utils import create_admin, create_user, login_user  # noqa: E402
from test.util_constant import (  # noqa: E402
    ADMIN_EMAIL,
    ANOTHER_USER_EMAIL,
    DEFAULT_PASSWORD,
    TEST_USER_EMAIL,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_sessionstart(session: pytest.Session) -> None:
    db_file = Path(os.environ['TEST_DB_FILE'])
    if db_file.exists():
        db_file.unlink()
    asyncio.run(_setup_test_database())


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # Clean before any fixture that writes rows
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _setup_test_database() -> None:
    import src.service.event_booking.driven_adapter.model  # noqa: F401

    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


async def _clean_all_tables() -> None:
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                await conn.execute(delete(table))
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    asyncio.run(_clean_all_tables())
    yield


@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Skip for unit tests - they don't use the HTTP client
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        yield
        return
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


# Users are recreated per test because clean_database wipes every table


@pytest.fixture
def admin_user(client: TestClient) -> dict[str, Any]:
    user = create_admin(client, ADMIN_EMAIL, DEFAULT_PASSWORD)
    user['token'] = login_user(client, ADMIN_EMAIL, DEFAULT_PASSWORD)
    return user


@pytest.fixture
def regular_user(client: TestClient) -> dict[str, Any]:
    user = create_user(client, TEST_USER_EMAIL, DEFAULT_PASSWORD)
    user['token'] = login_user(client, TEST_USER_EMAIL, DEFAULT_PASSWORD)
    return user


@pytest.fixture
def another_user(client: TestClient) -> dict[str, Any]:
    user = create_user(client, ANOTHER_USER_EMAIL, DEFAULT_PASSWORD)
    user['token'] = login_user(client, ANOTHER_USER_EMAIL, DEFAULT_PASSWORD)
    return user
