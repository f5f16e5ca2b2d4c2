from datetime import datetime, timezone

import pytest

from aad_cleaner.destroy.destroy_app_registration import remove_app_registration_async
from aad_cleaner.models import ApplicationRecord

pytestmark = pytest.mark.asyncio

APP = ApplicationRecord("obj-1", "app-1", "stale-app", datetime(2023, 1, 1, tzinfo=timezone.utc))


async def test_deletes_by_object_id(graph_client):
    assert await remove_app_registration_async(graph_client, APP) is True

    graph_client.applications.by_application_id.assert_called_once_with("obj-1")
    graph_client.applications.by_application_id.return_value.delete.assert_awaited_once()


async def test_delete_failure_is_reported_not_raised(graph_client, capsys):
    graph_client.applications.by_application_id.return_value.delete.side_effect = RuntimeError("Forbidden")

    assert await remove_app_registration_async(graph_client, APP) is False

    out = capsys.readouterr().out
    assert "Was not able to delete application stale-app with id=obj-1: Forbidden" in out
    assert "Error type: RuntimeError" in out
