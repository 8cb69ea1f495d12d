from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import (
    CATEGORY_CREATE,
    EVENT_CREATE,
    USER_CREATE,
    USER_CREATE_ADMIN,
    USER_LOGIN,
    VENUE_CREATE,
)
from test.util_constant import TEST_ADMIN_SECRET, TEST_FIRST_NAME, TEST_LAST_NAME


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def auth_headers(token: str) -> Dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


def login_user(client: TestClient, email: str, password: str) -> str:
    """Login and return the bearer token; the auth cookie is not kept."""
    login_response = client.post(USER_LOGIN, json={'email': email, 'password': password})
    assert login_response.status_code == 200, f'Login failed: {login_response.text}'
    client.cookies.clear()
    return login_response.json()['access_token']


def create_user(client: TestClient, email: str, password: str) -> Dict[str, Any]:
    response = client.post(
        USER_CREATE,
        json={
            'email': email,
            'password': password,
            'first_name': TEST_FIRST_NAME,
            'last_name': TEST_LAST_NAME,
        },
    )
    assert_response_status(response, 201, 'Failed to create user')
    return response.json()


def create_admin(client: TestClient, email: str, password: str) -> Dict[str, Any]:
    response = client.post(
        USER_CREATE_ADMIN,
        json={
            'email': email,
            'password': password,
            'first_name': 'Admin',
            'last_name': TEST_LAST_NAME,
            'admin_secret': TEST_ADMIN_SECRET,
        },
    )
    assert_response_status(response, 201, 'Failed to create admin')
    return response.json()


def create_venue(client: TestClient, token: str, name: str = 'Taipei Arena') -> Dict[str, Any]:
    response = client.post(
        VENUE_CREATE,
        json={
            'name': name,
            'address': 'No. 2, Sec. 4, Nanjing E. Rd.',
            'city': 'Taipei',
            'state': 'Taipei',
            'country': 'Taiwan',
            'capacity': 15000,
        },
        headers=auth_headers(token),
    )
    assert_response_status(response, 201, 'Failed to create venue')
    return response.json()


def create_category(client: TestClient, token: str, name: str = 'Concert') -> Dict[str, Any]:
    response = client.post(
        CATEGORY_CREATE, json={'name': name}, headers=auth_headers(token)
    )
    assert_response_status(response, 201, 'Failed to create category')
    return response.json()


def create_event(
    client: TestClient,
    token: str,
    *,
    venue_id: int,
    category_id: int,
    title: str = 'Summer Jazz Night',
    total_capacity: int = 100,
    price: float = 50.0,
    status: str = 'published',
    starts_in: timedelta = timedelta(days=30),
    ticket_tiers: Optional[list[dict[str, Any]]] = None,
) -> Dict[str, Any]:
    start = datetime.now(timezone.utc) + starts_in
    response = client.post(
        EVENT_CREATE,
        json={
            'title': title,
            'description': 'An evening of live jazz',
            'start_date_time': start.isoformat(),
            'end_date_time': (start + timedelta(hours=3)).isoformat(),
            'venue_id': venue_id,
            'category_id': category_id,
            'total_capacity': total_capacity,
            'price': price,
            'status': status,
            'ticket_tiers': ticket_tiers or [],
        },
        headers=auth_headers(token),
    )
    assert_response_status(response, 201, 'Failed to create event')
    return response.json()
