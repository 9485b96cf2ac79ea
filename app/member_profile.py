"""
Member profile view: overview, subscription, and the three optional
sections (physical, goals, activity).

Each section is either provided or not yet provided by the member.
Unprovided sections carry the message shown in place of their data.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.metrics import (
    amount_due,
    compute_bmi,
    display_value,
    format_amount,
    payment_status_badge,
    progress_table,
)
from app.records import (
    activity_to_record,
    goals_to_record,
    member_to_record,
    physical_details_to_record,
    workout_to_record,
)
from models.member import Member

NOT_SPECIFIED = "Not specified"


class Section(str, Enum):
    PHYSICAL = "physical"
    GOALS = "goals"
    ACTIVITY = "activity"


EMPTY_SECTION_MESSAGES = {
    Section.PHYSICAL: "The member has not updated their physical details yet.",
    Section.GOALS: "The member has not updated their goals and preferences yet.",
    Section.ACTIVITY: "The member has not recorded any activity or performance data yet.",
}


@dataclass(frozen=True)
class SectionView:
    section: Section
    available: bool
    data: Optional[dict] = None
    message: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "section": self.section.value,
            "available": self.available,
            "data": self.data,
            "message": self.message,
        }


def _physical_data(member: Member) -> Optional[dict]:
    record = physical_details_to_record(member.physical_details)
    if record is None:
        return None
    measurements = record["body_measurements"]
    return {
        "height": display_value(member.height, " cm"),
        "weight": display_value(member.weight, " kg"),
        "body_fat": display_value(member.body_fat, "%"),
        "bmi": compute_bmi(member.weight, member.height),
        "body_measurements": {
            part: display_value(value, " cm") for part, value in measurements.items()
        },
        "fitness_level": display_value(record["fitness_level"]),
    }


def _goals_data(member: Member) -> Optional[dict]:
    record = goals_to_record(member.goals_preferences)
    if record is None:
        return None
    frequency = record["workout_frequency"]
    return {
        "goals": [goal.capitalize() for goal in record["goals"]],
        "timeline": display_value(record["timeline"], default=NOT_SPECIFIED),
        "workout_frequency": (
            f"{frequency} times/week" if frequency else NOT_SPECIFIED
        ),
        "workout_styles": [style.capitalize() for style in record["workout_styles"]],
        "diet_preference": display_value(record["diet_preference"], default=NOT_SPECIFIED),
        "diet_remarks": display_value(record["diet_remarks"], default="None"),
    }


def _activity_data(member: Member) -> Optional[dict]:
    activity = member.activity_performance
    if activity is None and not member.progress_logs and not member.workout_history:
        return None
    record = activity_to_record(activity) or {}
    return {
        "attendance": record.get("attendance") or 0,
        "goal_achievement": record.get("goal_achievement") or 0,
        "workout_history": [workout_to_record(w) for w in member.workout_history],
        "progress_logs": progress_table(member.progress_logs),
    }


_SECTION_BUILDERS = {
    Section.PHYSICAL: _physical_data,
    Section.GOALS: _goals_data,
    Section.ACTIVITY: _activity_data,
}


def section_view(member: Member, section: Section | str) -> SectionView:
    try:
        section = Section(section)
    except ValueError:
        raise ValueError(f"Unknown profile section {section!r}")

    data = _SECTION_BUILDERS[section](member)
    if data is None:
        return SectionView(section=section, available=False, message=EMPTY_SECTION_MESSAGES[section])
    return SectionView(section=section, available=True, data=data)


def build_member_profile(member: Member) -> dict:
    """
    Everything the member detail screen shows, with placeholders for
    optional fields the member has not provided.
    """
    record = member_to_record(member)
    return {
        "record": record,
        "overview": {
            "unique_id": record["unique_id"],
            "name": record["name"],
            "age": display_value(record["age"]),
            "date_of_birth": display_value(record["date_of_birth"]),
            "phone": display_value(record["phone"]),
            "email": display_value(record["email"]),
            "address": display_value(record["address"]),
            "emergency_contact": display_value(record["emergency_contact"]),
            "bmi": compute_bmi(member.weight, member.height),
        },
        "subscription": {
            "type": record["subscription_type"].capitalize(),
            "start": record["subscription_start"],
            "end": record["subscription_end"],
            "payment_status": payment_status_badge(record["payment_status"]),
            "amount_due": format_amount(amount_due(record["subscription_type"])),
        },
        "sections": {
            section.value: section_view(member, section).as_dict() for section in Section
        },
    }
