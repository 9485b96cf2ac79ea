from datetime import date, timedelta

import pytest
from sqlalchemy import select, func

from app.errors import ValidationError, NotFoundError
from app.member_service import (
    create_member,
    get_member,
    get_member_profile,
    list_member_records,
    update_member,
    change_subscription_type,
    delete_member,
    save_physical_details,
    save_goals_preferences,
    save_activity_performance,
    log_progress,
    log_workout,
)
from models.member import (
    Member,
    PhysicalDetails,
    GoalsPreferences,
    ActivityPerformance,
    ProgressLog,
    WorkoutHistory,
)
from tests.helpers import make_member


def test_create_member_derives_end_date(session):
    m = make_member(
        session,
        subscription_type="monthly",
        subscription_start="2025-01-31",
    )
    assert m.member_id is not None
    assert m.unique_id == "FH10001"
    assert m.subscription_start == date(2025, 1, 31)
    assert m.subscription_end == date(2025, 2, 28)


def test_create_member_generates_sequential_unique_ids(session):
    first = make_member(session, email="a@example.com")
    second = make_member(session, name="Emma Wilson", email="b@example.com")
    assert first.unique_id == "FH10001"
    assert second.unique_id == "FH10002"


def test_create_member_normalizes_form_strings(session):
    m = create_member(
        session,
        name="  Sarah Johnson ",
        age="29",
        height="170",
        weight="",
        email="",
        phone="  ",
        subscription_type="Quarterly",
        subscription_start="2025-03-15",
        payment_status="Pending",
    )
    assert m.name == "Sarah Johnson"
    assert m.age == 29
    assert m.height == 170.0
    assert m.weight is None
    assert m.email is None
    assert m.phone is None
    assert m.subscription_type == "quarterly"
    assert m.payment_status == "pending"
    assert m.subscription_end == date(2025, 6, 15)


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": "J"}, "Name"),
        ({"email": "not-an-email"}, "email"),
        ({"subscription_type": "weekly"}, "subscription type"),
        ({"payment_status": "waived"}, "payment status"),
        ({"weight": "-3"}, "positive"),
        ({"height": "tall"}, "valid number"),
        ({"subscription_start": None}, "start date"),
        ({"date_of_birth": date.today() + timedelta(days=1)}, "Date of birth"),
        ({"date_of_birth": "1899-12-31"}, "Date of birth"),
    ],
)
def test_create_member_validation(session, overrides, message):
    with pytest.raises(ValidationError, match=message):
        make_member(session, **overrides)
    # nothing written
    assert session.scalar(select(func.count(Member.member_id))) == 0


def test_duplicate_unique_id_or_email_rejected(session):
    make_member(session, unique_id="FH20000", email="dup@example.com")

    with pytest.raises(ValidationError, match="already exists"):
        make_member(session, unique_id="FH20000", email="other@example.com")
    with pytest.raises(ValidationError, match="already exists"):
        make_member(session, unique_id="FH20001", email="dup@example.com")

    assert len(list_member_records(session)) == 1


def test_update_member_recomputes_end_date(session):
    m = make_member(session, subscription_start="2025-03-01", subscription_type="monthly")

    m = update_member(session, m.member_id, subscription_start="2025-05-31")
    assert m.subscription_end == date(2025, 6, 30)

    m = update_member(session, m.member_id, subscription_type="annual")
    assert m.subscription_end == date(2026, 5, 31)


def test_update_member_ignores_end_date_and_unique_id(session):
    m = make_member(session)
    original_end = m.subscription_end

    m2 = update_member(
        session,
        m.member_id,
        subscription_end="2030-01-01",
        unique_id="FH99999",
        phone="1234567890",
    )
    assert m2.subscription_end == original_end
    assert m2.unique_id == "FH10001"
    assert m2.phone == "1234567890"


def test_update_missing_member(session):
    with pytest.raises(NotFoundError):
        update_member(session, 999, name="Nobody")


def test_change_subscription_type_from_stored_start(session):
    m = make_member(session, subscription_start="2024-12-20", subscription_type="quarterly")

    record = change_subscription_type(session, m.member_id, "monthly")

    assert record["subscription_type"] == "monthly"
    assert record["subscription_start"] == "2024-12-20"
    assert record["subscription_end"] == "2025-01-20"
    stored = get_member(session, m.member_id)
    assert stored.subscription_end == date(2025, 1, 20)
    assert stored.subscription_type == "monthly"


def test_change_subscription_type_rejects_unknown_plan(session):
    m = make_member(session)
    with pytest.raises(ValidationError):
        change_subscription_type(session, m.member_id, "biweekly")
    assert get_member(session, m.member_id).subscription_type == "monthly"


def test_delete_member_cascades_nested_rows(session):
    m = make_member(session)
    save_physical_details(session, m.member_id, chest=100, fitness_level="beginner")
    save_goals_preferences(session, m.member_id, goals=["strength"])
    save_activity_performance(session, m.member_id, attendance=80)
    log_progress(session, m.member_id, log_date="2025-03-01", weight=78, body_fat=22)
    log_workout(session, m.member_id, workout_date="2025-03-02", workout="Yoga", duration=45)

    delete_member(session, m.member_id)

    for model in (Member, PhysicalDetails, GoalsPreferences, ActivityPerformance, ProgressLog, WorkoutHistory):
        assert session.scalar(select(func.count()).select_from(model)) == 0

    with pytest.raises(NotFoundError):
        delete_member(session, m.member_id)


def test_sections_are_upserted(session):
    m = make_member(session)
    first = save_physical_details(session, m.member_id, chest=100)
    second = save_physical_details(session, m.member_id, chest=98, waist=82)

    assert first.physical_id == second.physical_id
    assert second.chest == 98
    assert session.scalar(select(func.count()).select_from(PhysicalDetails)) == 1


def test_section_validation(session):
    m = make_member(session)
    with pytest.raises(ValidationError, match="Fitness level"):
        save_physical_details(session, m.member_id, fitness_level="elite")
    with pytest.raises(ValidationError, match="Timeline"):
        save_goals_preferences(session, m.member_id, timeline="someday")
    with pytest.raises(ValidationError, match="Attendance"):
        save_activity_performance(session, m.member_id, attendance=150)
    with pytest.raises(ValidationError, match="Duration"):
        log_workout(session, m.member_id, workout_date="2025-03-02", workout="Run", duration=0)


def test_goals_accept_comma_separated_tags(session):
    m = make_member(session)
    goals = save_goals_preferences(
        session, m.member_id,
        goals="Weight Loss, endurance",
        workout_styles=["Cardio", ""],
        workout_frequency="4",
    )
    assert goals.goals == ["weight loss", "endurance"]
    assert goals.workout_styles == ["cardio"]
    assert goals.workout_frequency == 4


def test_member_profile_reflects_saved_sections(session):
    m = make_member(session)

    profile = get_member_profile(session, m.member_id)
    assert profile["sections"]["physical"]["available"] is False

    save_physical_details(session, m.member_id, chest=102, fitness_level="intermediate")
    log_progress(session, m.member_id, log_date="2025-03-15", weight=76.8, body_fat=21.4)
    log_progress(session, m.member_id, log_date="2025-03-01", weight=78.0, body_fat=22.0)

    profile = get_member_profile(session, m.member_id)
    physical = profile["sections"]["physical"]
    activity = profile["sections"]["activity"]
    assert physical["available"] is True
    assert physical["data"]["body_measurements"]["chest"] == "102.0 cm"
    assert activity["available"] is True
    assert activity["data"]["progress_logs"][0]["change"] == "Baseline"
    assert activity["data"]["progress_logs"][1]["change"]["weight_change"] == -1.2


def test_generated_id_skips_ids_already_chosen(session):
    make_member(session, unique_id="FH10002", email="a@example.com")
    generated = make_member(session, name="Bob Ray", email="b@example.com")
    supplied = make_member(session, name="Cara Lin", email="c@example.com", unique_id="GYM-7")
    after = make_member(session, name="Dan Ng", email="d@example.com")

    assert generated.unique_id == "FH10003"
    assert supplied.unique_id == "GYM-7"
    assert after.unique_id == "FH10004"


def test_deleted_member_id_is_not_handed_out_again(session):
    make_member(session, email="a@example.com")
    last = make_member(session, name="Emma Wilson", email="b@example.com")
    assert last.unique_id == "FH10002"

    delete_member(session, last.member_id)
    newcomer = make_member(session, name="Lisa Cooper", email="c@example.com")

    assert newcomer.unique_id == "FH10003"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": None}, "Name"),
        ({"name": 123}, "Name must be text"),
        ({"email": ["john@example.com"]}, "Email must be text"),
        ({"subscription_type": 3}, "subscription type"),
        ({"payment_status": True}, "Payment status must be text"),
    ],
)
def test_create_member_rejects_non_text_values(session, overrides, message):
    with pytest.raises(ValidationError, match=message):
        make_member(session, **overrides)


def test_create_member_without_required_fields(session):
    with pytest.raises(ValidationError, match="start date"):
        create_member(session, name="John Doe")
    with pytest.raises(ValidationError, match="Name"):
        create_member(session, subscription_start="2025-03-01")


def test_timestamps_are_set_by_the_database(session):
    m = make_member(session)
    assert m.created_at is not None
    assert m.updated_at is not None
