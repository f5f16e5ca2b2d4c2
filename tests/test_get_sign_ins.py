from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from aad_cleaner.models import SignInRecord
from aad_cleaner.query.get_sign_ins import build_sign_in_filter, get_sign_ins_async

SIGNED_IN = datetime(2024, 6, 1, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_returns_only_most_recent_sign_in(sign_in_client, collection):
    sign_in_client.audit_logs.sign_ins.get.return_value = collection(
        [SimpleNamespace(app_id="app-1", created_date_time=SIGNED_IN)],
        next_link="https://graph.microsoft.com/beta/auditLogs/signIns?$skiptoken=abc",
    )

    sign_ins = await get_sign_ins_async(sign_in_client, "app-1")

    assert sign_ins == [SignInRecord(app_id="app-1", created_date_time=SIGNED_IN)]
    sign_in_client.audit_logs.sign_ins.with_url.assert_not_called()


@pytest.mark.asyncio
async def test_no_sign_ins(sign_in_client, collection):
    sign_in_client.audit_logs.sign_ins.get.return_value = collection([])

    assert await get_sign_ins_async(sign_in_client, "app-1") == []


@pytest.mark.asyncio
async def test_request_is_top_one_newest_first(sign_in_client, collection):
    sign_in_client.audit_logs.sign_ins.get.return_value = collection([])

    await get_sign_ins_async(sign_in_client, "app-1")

    query_params = sign_in_client.audit_logs.sign_ins.get.call_args.kwargs["request_configuration"].query_parameters
    assert query_params.top == 1
    assert query_params.orderby == ["createdDateTime desc"]
    assert query_params.filter == build_sign_in_filter("app-1")


@pytest.mark.asyncio
async def test_lookup_failure_is_reported_and_raised(sign_in_client, capsys):
    sign_in_client.audit_logs.sign_ins.get.side_effect = RuntimeError("503 Service Unavailable")

    with pytest.raises(RuntimeError):
        await get_sign_ins_async(sign_in_client, "app-1")

    assert "Failed to get sign-ins of application app-1" in capsys.readouterr().out


def test_filter_covers_all_event_types():
    assert build_sign_in_filter("1234") == (
        "signInEventTypes/any(t: t eq 'interactiveUser' or t eq 'nonInteractiveUser'"
        " or t eq 'servicePrincipal' or t eq 'managedIdentity') and appId eq '1234'"
    )


def test_filter_escapes_quotes():
    assert build_sign_in_filter("a'b").endswith("appId eq 'a''b'")
