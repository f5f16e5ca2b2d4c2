from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def now():
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def collection():
    """Factory for Graph collection responses (value + odata_next_link)"""
    def _collection(items, next_link=None):
        return SimpleNamespace(value=items, odata_next_link=next_link)
    return _collection


@pytest.fixture
def graph_app():
    """Factory for Graph Application models carrying the selected fields"""
    def _graph_app(object_id, display_name, created_date_time, tags=None, app_id=None):
        return SimpleNamespace(
            id=object_id,
            app_id=app_id or f"app-{object_id}",
            display_name=display_name,
            created_date_time=created_date_time,
            tags=tags,
        )
    return _graph_app


@pytest.fixture
def graph_client():
    client = MagicMock()
    client.applications.get = AsyncMock()
    client.applications.with_url.return_value.get = AsyncMock()
    client.applications.by_application_id.return_value.delete = AsyncMock(return_value=None)
    return client


@pytest.fixture
def sign_in_client():
    client = MagicMock()
    client.audit_logs.sign_ins.get = AsyncMock()
    client.audit_logs.sign_ins.with_url.return_value.get = AsyncMock()
    return client
