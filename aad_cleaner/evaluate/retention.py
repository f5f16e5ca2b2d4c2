"""
Retention policy for app registrations
"""

from datetime import datetime, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta

from aad_cleaner.models import ApplicationRecord, RetentionVerdict

EXPIRE_TAG_PREFIX = "expireOn : "
EXPIRE_DATE_FORMAT = "%Y-%m-%d"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_expiry_tag(tag: str) -> Optional[datetime]:
    """
    Read an 'expireOn : YYYY-MM-DD' tag.

    Returns None for tags without the prefix, the expiry date as a UTC
    datetime otherwise. Raises ValueError when the date cannot be parsed.
    """
    if not tag.startswith(EXPIRE_TAG_PREFIX):
        return None
    value = tag[len(EXPIRE_TAG_PREFIX):]
    return datetime.strptime(value, EXPIRE_DATE_FORMAT).replace(tzinfo=timezone.utc)


def evaluate(app: ApplicationRecord, sign_in_count: int, now: datetime, retention_months: int = 3) -> RetentionVerdict:
    """
    Decide whether an application is stale.

    An app is deleted only when it is older than retention_months, has no
    sign-ins and carries no expireOn tag dated in the future. When several
    expireOn tags are present the last parseable one wins.
    """
    now = _as_utc(now)

    is_older_than_three_months = False
    if app.created_date_time is not None:
        threshold = now - relativedelta(months=retention_months)
        is_older_than_three_months = _as_utc(app.created_date_time) < threshold

    has_sign_in = sign_in_count > 0

    has_not_expired = False
    for tag in app.tags:
        try:
            expires_on = parse_expiry_tag(tag)
        except ValueError as e:
            print(f"   Was not able to parse date of tag '{tag}' on application {app.display_name}: {e}")
            continue
        if expires_on is not None:
            has_not_expired = expires_on > now

    return RetentionVerdict(
        is_older_than_three_months=is_older_than_three_months,
        has_sign_in=has_sign_in,
        has_not_expired=has_not_expired,
        will_delete=is_older_than_three_months and not has_sign_in and not has_not_expired,
    )


def _flag(value: bool) -> str:
    return "true" if value else "false"


def format_trace(display_name: str, verdict: RetentionVerdict) -> str:
    return (
        f"DisplayName={display_name}"
        f" isOlderThanThreeMonths={_flag(verdict.is_older_than_three_months)}"
        f" hasSignIns={_flag(verdict.has_sign_in)}"
        f" hasNotExpired={_flag(verdict.has_not_expired)}"
        f" willBeDeleted={_flag(verdict.will_delete)}"
    )
