"""
Subscription lifecycle: end-date derivation for the three plan types.

The end date is never edited directly. Any change to the start date or the
plan type goes through derive_end_date() and overwrites the previous end.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Mapping, Optional

from dateutil.relativedelta import relativedelta

from app.errors import ValidationError

PLAN_TYPES = ("monthly", "quarterly", "annual")

# relativedelta clamps to the last valid day of the target month,
# e.g. Jan 31 + 1 month -> Feb 28/29, Feb 29 + 1 year -> Feb 28.
PLAN_INTERVALS = {
    "monthly": relativedelta(months=1),
    "quarterly": relativedelta(months=3),
    "annual": relativedelta(years=1),
}

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: date | datetime | str) -> date:
    """
    Accept a date, a datetime (date part is used) or a YYYY-MM-DD string.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        try:
            return datetime.strptime(stripped, ISO_DATE_FORMAT).date()
        except ValueError:
            raise ValidationError(f"Invalid date {value!r}; expected YYYY-MM-DD.")
    raise ValidationError(f"Invalid date {value!r}; expected YYYY-MM-DD.")


def format_iso_date(value: Optional[date | datetime | str]) -> Optional[str]:
    if value is None:
        return None
    return parse_iso_date(value).strftime(ISO_DATE_FORMAT)


def normalize_plan_type(plan_type: str) -> str:
    normalized = plan_type.strip().lower() if isinstance(plan_type, str) else ""
    if normalized not in PLAN_INTERVALS:
        raise ValidationError(
            f"Unknown subscription type {plan_type!r}. "
            f"Expected one of: {', '.join(PLAN_TYPES)}."
        )
    return normalized


def derive_end_date(start: date | datetime | str, plan_type: str) -> date:
    start_date = parse_iso_date(start)
    return start_date + PLAN_INTERVALS[normalize_plan_type(plan_type)]


def on_plan_type_changed(current_start: date | datetime | str, new_type: str) -> date:
    """Plan type changed in a form: recompute from the existing start date."""
    return derive_end_date(current_start, new_type)


def on_start_date_changed(new_start: date | datetime | str, current_type: str) -> date:
    """Start date changed in a form: recompute with the existing plan type."""
    return derive_end_date(new_start, current_type)


def change_subscription_type(record: Mapping, new_type: str) -> dict:
    """
    Apply a plan-type change to a stored member record.

    The end date is recomputed from the record's stored subscription_start
    (never from today) and written back as a YYYY-MM-DD string. The input
    record is left untouched; the caller decides whether to persist.
    """
    start = record.get("subscription_start")
    if start is None:
        raise ValidationError("Member record has no subscription start date.")

    plan_type = normalize_plan_type(new_type)
    updated = dict(record)
    updated["subscription_type"] = plan_type
    updated["subscription_end"] = format_iso_date(derive_end_date(start, plan_type))
    return updated


def new_subscription_defaults(today: Optional[date] = None) -> dict:
    """Default values for the member-creation form."""
    if today is None:
        today = date.today()
    return {
        "subscription_type": "monthly",
        "subscription_start": format_iso_date(today),
        "subscription_end": format_iso_date(derive_end_date(today, "monthly")),
        "payment_status": "pending",
    }
