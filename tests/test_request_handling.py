"""
Request handling tests
Database and bcrypt work must run in the threadpool, not on the event loop
"""

import inspect
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.routing import APIRoute
from jose import jwt

from stockroom.api import deps
from stockroom.core.config import settings
from stockroom.core.database import utc_now
from stockroom.core.security import create_access_token
from stockroom.main import app

API_ROUTES = [route for route in app.routes if isinstance(route, APIRoute)]


@pytest.mark.parametrize("route", API_ROUTES, ids=lambda r: f"{sorted(r.methods)[0]} {r.path}")
def test_endpoints_are_sync(route: APIRoute):
    assert not inspect.iscoroutinefunction(route.endpoint)


@pytest.mark.parametrize("dependency", [deps.get_current_user, deps.get_current_admin_user])
def test_auth_dependencies_are_sync(dependency):
    assert not inspect.iscoroutinefunction(dependency)


class TestTimestamps:

    def test_utc_now_is_naive_utc(self):
        before = datetime.now(timezone.utc).replace(tzinfo=None)
        now = utc_now()
        after = datetime.now(timezone.utc).replace(tzinfo=None)

        assert now.tzinfo is None
        assert before <= now <= after

    def test_token_expiry_is_in_the_future(self):
        token = create_access_token({"sub": "a" * 24}, expires_delta=timedelta(minutes=5))

        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        remaining = claims["exp"] - datetime.now(timezone.utc).timestamp()
        assert 0 < remaining <= 5 * 60 + 1
