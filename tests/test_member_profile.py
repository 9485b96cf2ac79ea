from datetime import date

import pytest

from app.member_profile import (
    EMPTY_SECTION_MESSAGES,
    Section,
    build_member_profile,
    section_view,
)
from models.member import (
    Member,
    PhysicalDetails,
    GoalsPreferences,
    ActivityPerformance,
    ProgressLog,
    WorkoutHistory,
)


def _member(**overrides):
    fields = dict(
        member_id=1,
        unique_id="FH10001",
        name="John Doe",
        age=28,
        height=178.0,
        weight=75.0,
        subscription_type="annual",
        subscription_start=date(2025, 1, 10),
        subscription_end=date(2026, 1, 10),
        payment_status="paid",
    )
    fields.update(overrides)
    return Member(**fields)


def test_new_member_has_no_optional_sections():
    profile = build_member_profile(_member())

    for section in Section:
        view = profile["sections"][section.value]
        assert view["available"] is False
        assert view["data"] is None
        assert view["message"] == EMPTY_SECTION_MESSAGES[section]


def test_overview_uses_placeholders_for_missing_fields():
    overview = build_member_profile(_member())["overview"]

    assert overview["phone"] == "Not provided"
    assert overview["email"] == "Not provided"
    assert overview["age"] == "28"
    assert overview["bmi"] == 23.7


def test_bmi_unavailable_without_weight():
    profile = build_member_profile(_member(weight=None))
    assert profile["overview"]["bmi"] == "N/A"


def test_subscription_block():
    subscription = build_member_profile(_member())["subscription"]

    assert subscription["type"] == "Annual"
    assert subscription["start"] == "2025-01-10"
    assert subscription["end"] == "2026-01-10"
    assert subscription["amount_due"] == "$480.00"
    assert subscription["payment_status"]["color"] == "green"


def test_physical_section():
    member = _member()
    member.physical_details = PhysicalDetails(chest=102.0, waist=84.0, fitness_level="intermediate")

    view = section_view(member, Section.PHYSICAL)

    assert view.available is True
    assert view.message is None
    assert view.data["bmi"] == 23.7
    assert view.data["body_measurements"]["chest"] == "102.0 cm"
    assert view.data["body_measurements"]["hips"] == "Not provided"
    assert view.data["fitness_level"] == "intermediate"


def test_goals_section_placeholders():
    member = _member()
    member.goals_preferences = GoalsPreferences(goals=["weight loss"], workout_styles=["cardio"])

    data = section_view(member, "goals").data

    assert data["goals"] == ["Weight loss"]
    assert data["workout_styles"] == ["Cardio"]
    assert data["timeline"] == "Not specified"
    assert data["workout_frequency"] == "Not specified"
    assert data["diet_remarks"] == "None"


def test_goals_section_frequency():
    member = _member()
    member.goals_preferences = GoalsPreferences(workout_frequency=4, timeline="long term")

    data = section_view(member, Section.GOALS).data

    assert data["workout_frequency"] == "4 times/week"
    assert data["timeline"] == "long term"


def test_activity_section_available_from_logs_alone():
    member = _member()
    member.progress_logs = [
        ProgressLog(date=date(2025, 3, 15), weight=76.8, body_fat=21.4),
        ProgressLog(date=date(2025, 3, 1), weight=78.0, body_fat=22.0),
    ]
    member.workout_history = [
        WorkoutHistory(date=date(2025, 3, 2), workout="Strength Training", duration=60),
    ]

    view = section_view(member, Section.ACTIVITY)

    assert view.available is True
    assert view.data["attendance"] == 0
    assert view.data["progress_logs"][0]["date"] == "2025-03-01"
    assert view.data["progress_logs"][0]["change"] == "Baseline"
    assert view.data["progress_logs"][1]["change"] == {"weight_change": -1.2, "body_fat_change": -0.6}
    assert view.data["workout_history"][0]["workout"] == "Strength Training"


def test_activity_section_from_activity_row():
    member = _member()
    member.activity_performance = ActivityPerformance(attendance=85.0, goal_achievement=70.0)

    data = section_view(member, Section.ACTIVITY).data

    assert data["attendance"] == 85.0
    assert data["goal_achievement"] == 70.0
    assert data["progress_logs"] == []


def test_unknown_section():
    with pytest.raises(ValueError, match="Unknown profile section"):
        section_view(_member(), "billing")
