"""
Stale app registration cleanup: list, evaluate and (optionally) delete
"""

from datetime import datetime, timezone
from typing import Optional

from aad_cleaner.destroy import destroy_app_registration
from aad_cleaner.evaluate import retention
from aad_cleaner.models import CleanupSummary
from aad_cleaner.query import get_sign_ins, list_applications
from aad_cleaner.settings import CleanerConfig


async def clean_applications_async(graph_client, sign_in_client, config: CleanerConfig, now: Optional[datetime] = None) -> CleanupSummary:
    """
    Evaluate every matching app registration and delete the stale ones.

    A listing failure propagates and aborts the run. A failed sign-in lookup
    skips only that application, and a failed delete is recorded in the
    summary before moving on.
    """

    if now is None:
        now = datetime.now(timezone.utc)

    summary = CleanupSummary(report_only=config.report_only)
    applications = await list_applications.list_applications_async(graph_client, config.application_filter)

    for app in applications:
        try:
            sign_ins = await get_sign_ins.get_sign_ins_async(sign_in_client, app.app_id)
        except Exception as e:
            print(f"   Skipping application {app.display_name} (App ID: {app.app_id}): {str(e)}")
            summary.skipped += 1
            continue

        verdict = retention.evaluate(app, len(sign_ins), now, config.retention_months)
        print(retention.format_trace(app.display_name, verdict))
        summary.evaluated += 1

        if not verdict.will_delete:
            continue
        summary.marked_for_deletion += 1

        if config.report_only:
            continue

        if await destroy_app_registration.remove_app_registration_async(graph_client, app):
            summary.deleted += 1
        else:
            summary.failed_deletes.append(app.id)

    return summary
