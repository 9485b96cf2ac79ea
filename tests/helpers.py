from __future__ import annotations

from datetime import date

from app.member_service import create_member
from models.member import Member


def make_member(session, **overrides) -> Member:
    """
    Persist a member with sensible defaults so tests only spell out the
    fields they care about.
    """
    fields = {
        "name": "John Doe",
        "email": "john@example.com",
        "height": 178,
        "weight": 75,
        "subscription_type": "monthly",
        "subscription_start": date(2025, 3, 1),
        "payment_status": "paid",
    }
    fields.update(overrides)
    return create_member(session, **fields)


def member_record(**overrides) -> dict:
    """A persisted-shape member dict, no database involved."""
    record = {
        "id": 1,
        "unique_id": "FH10001",
        "name": "John Doe",
        "age": 28,
        "date_of_birth": None,
        "phone": None,
        "email": "john@example.com",
        "address": None,
        "emergency_contact": None,
        "height": 178,
        "weight": 75,
        "body_fat": None,
        "subscription_type": "monthly",
        "subscription_start": "2025-03-01",
        "subscription_end": "2025-04-01",
        "payment_status": "paid",
    }
    record.update(overrides)
    return record
