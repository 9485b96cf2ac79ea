from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from app.errors import ValidationError
from app.pricing import PLAN_FEES, CURRENCY_SYMBOL

BMI_UNAVAILABLE = "N/A"
BASELINE = "Baseline"
NOT_PROVIDED = "Not provided"

PAYMENT_STATUSES = ("paid", "pending", "overdue")

_BADGE_STYLES = {
    "paid": ("green", "bg-green-100 text-green-800"),
    "pending": ("yellow", "bg-yellow-100 text-yellow-800"),
    "overdue": ("red", "bg-red-100 text-red-800"),
}
_FALLBACK_BADGE = ("gray", "bg-gray-100 text-gray-800")


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def compute_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> float | str:
    """
    BMI rounded to one decimal place, or "N/A" when weight (or height)
    has not been recorded.
    """
    if not weight_kg or not height_cm:
        return BMI_UNAVAILABLE
    height_m = float(height_cm) / 100
    return round(float(weight_kg) / (height_m * height_m), 1)


def amount_due(plan_type: str) -> Decimal:
    try:
        return PLAN_FEES[(plan_type or "").strip().lower()]
    except KeyError:
        raise ValidationError(f"Unknown subscription type {plan_type!r}.")


def format_amount(amount: Decimal) -> str:
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def payment_status_badge(status: Optional[str]) -> dict:
    label = (status or "").strip()
    color, css_class = _BADGE_STYLES.get(label.lower(), _FALLBACK_BADGE)
    return {
        "label": label[:1].upper() + label[1:],
        "color": color,
        "css_class": css_class,
    }


def _difference(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    if current is None or previous is None:
        return None
    return round(float(current) - float(previous), 1)


def progress_delta(current: Any, previous: Any = None) -> dict | str:
    """
    Change between two consecutive progress log entries.
    The first entry of a sequence has no predecessor and reports "Baseline".
    """
    if previous is None:
        return BASELINE
    return {
        "weight_change": _difference(_field(current, "weight"), _field(previous, "weight")),
        "body_fat_change": _difference(_field(current, "body_fat"), _field(previous, "body_fat")),
    }


def progress_table(logs: Iterable[Any]) -> list[dict]:
    """Chronological rows (oldest first) each carrying its delta."""
    ordered = sorted(logs, key=lambda log: str(_field(log, "date")))
    rows: list[dict] = []
    previous = None
    for log in ordered:
        log_date = _field(log, "date")
        rows.append(
            {
                "date": log_date.isoformat() if hasattr(log_date, "isoformat") else log_date,
                "weight": _field(log, "weight"),
                "body_fat": _field(log, "body_fat"),
                "change": progress_delta(log, previous),
            }
        )
        previous = log
    return rows


def display_value(value: Any, unit: str = "", default: str = NOT_PROVIDED) -> str:
    """Render an optional field, using an explicit placeholder when missing."""
    if value is None or value == "":
        return default
    return f"{value}{unit}"
