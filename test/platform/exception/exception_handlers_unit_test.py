from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.exception.exceptions import DomainError, InternalError


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get('/crash')
    async def crash() -> None:
        raise RuntimeError('database exploded')

    @app.get('/internal')
    async def internal() -> None:
        raise InternalError('Sweep state is inconsistent', details={'event_id': 3})

    @app.get('/seats')
    async def seats() -> None:
        raise DomainError('Not enough seats available', details={'available': 5})

    return app


@pytest.mark.unit
class TestExceptionHandlers:
    @pytest.fixture(scope='class')
    def app_client(self) -> TestClient:
        return TestClient(_build_app(), raise_server_exceptions=False)

    def test_unhandled_error_uses_internal_error_kind(self, app_client) -> None:
        response = app_client.get('/crash')

        assert response.status_code == 500
        assert response.json() == {
            'detail': 'Internal server error',
            'kind': InternalError.kind,
            'details': None,
        }

    def test_raised_internal_error_keeps_details(self, app_client) -> None:
        response = app_client.get('/internal')

        assert response.status_code == 500
        assert response.json()['kind'] == 'InternalError'
        assert response.json()['details'] == {'event_id': 3}

    def test_domain_error_is_validation_error(self, app_client) -> None:
        response = app_client.get('/seats')

        assert response.status_code == 400
        assert response.json() == {
            'detail': 'Not enough seats available',
            'kind': 'ValidationError',
            'details': {'available': 5},
        }
