import logging
import re
from datetime import date
from typing import Optional
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from models.member import (
    Member,
    PhysicalDetails,
    GoalsPreferences,
    ActivityPerformance,
    ProgressLog,
    WorkoutHistory,
)
from app.errors import ValidationError, NotFoundError, StorageError
from app.member_profile import build_member_profile
from app.metrics import PAYMENT_STATUSES
from app.records import member_to_record
from app.subscription import (
    change_subscription_type as apply_subscription_change,
    derive_end_date,
    normalize_plan_type,
    parse_iso_date,
)

logger = logging.getLogger(__name__)

UNIQUE_ID_PREFIX = "FH"
UNIQUE_ID_BASE = 10000
MIN_NAME_LENGTH = 2
EARLIEST_BIRTH_DATE = date(1900, 1, 1)
FITNESS_LEVELS = ("beginner", "intermediate", "advanced")
GOAL_TIMELINES = ("short term", "long term")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _normalize_text(value, field: str) -> Optional[str]:
    """Strip free-text input; blank becomes None, non-strings are rejected."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text.")
    return value.strip() or None


def _normalize_number(
    value: Optional[float | str],
    field: str,
    *,
    maximum: Optional[float] = None,
    integer: bool = False,
) -> Optional[float | int]:
    """
    Accept numbers or numeric strings; blank strings become None.
    Negative values (and values above ``maximum``) are rejected.
    """
    value = _blank_to_none(value)
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a valid number.")
    if number < 0:
        raise ValidationError(f"{field} must be a positive number.")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field} must be at most {maximum:g}.")
    return int(number) if integer else number


def _normalize_name(name: Optional[str]) -> str:
    name = _normalize_text(name, "Name")
    if not name or len(name) < MIN_NAME_LENGTH:
        raise ValidationError(f"Name must be at least {MIN_NAME_LENGTH} characters")
    return name


def _normalize_email(email: Optional[str]) -> Optional[str]:
    email = _normalize_text(email, "Email")
    if email is None:
        return None
    if not _EMAIL_RE.match(email):
        raise ValidationError("Invalid email address")
    return email.lower()


def _normalize_payment_status(status: Optional[str]) -> str:
    normalized = (_normalize_text(status, "Payment status") or "").lower()
    if normalized not in PAYMENT_STATUSES:
        raise ValidationError(
            f"Unknown payment status {status!r}. Expected one of: {', '.join(PAYMENT_STATUSES)}."
        )
    return normalized


def _normalize_birth_date(value, *, today: Optional[date] = None) -> Optional[date]:
    value = _blank_to_none(value)
    if value is None:
        return None
    birth_date = parse_iso_date(value)
    today = today or date.today()
    if birth_date > today or birth_date < EARLIEST_BIRTH_DATE:
        raise ValidationError("Date of birth must be between 1900-01-01 and today")
    return birth_date


def _normalize_choice(value: Optional[str], field: str, choices: tuple) -> Optional[str]:
    value = _normalize_text(value, field)
    if value is None:
        return None
    normalized = value.lower()
    if normalized not in choices:
        raise ValidationError(f"{field} must be one of: {', '.join(choices)}.")
    return normalized


def _normalize_tags(values) -> Optional[list[str]]:
    if values is None:
        return None
    if isinstance(values, str):
        values = values.split(",")
    elif not isinstance(values, (list, tuple)):
        raise ValidationError("Expected a list or a comma-separated string.")
    tags = [tag.lower() for tag in (_normalize_text(v, "Each entry") for v in values) if tag]
    return tags or None


def _commit(session: Session, action: str, *, flush_only: bool = False) -> None:
    try:
        if flush_only:
            session.flush()
        else:
            session.commit()
    except IntegrityError:
        session.rollback()
        logger.warning("Rejected attempt to %s: unique constraint violated", action)
        raise ValidationError("Unique ID or email already exists")
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Database error while trying to %s", action)
        raise StorageError(action)


def _assign_unique_id(session: Session, member: Member) -> None:
    """
    FH + (10000 + member_id), stepping past any FH ID a caller already
    chose. member_ids are never reused, so a deleted member's ID is not
    handed out again.
    """
    taken = set(
        session.scalars(
            select(Member.unique_id).where(
                Member.unique_id.like(f"{UNIQUE_ID_PREFIX}%"),
                Member.member_id != member.member_id,
            )
        )
    )
    number = UNIQUE_ID_BASE + member.member_id
    while f"{UNIQUE_ID_PREFIX}{number}" in taken:
        number += 1
    member.unique_id = f"{UNIQUE_ID_PREFIX}{number}"


# 1. Create / read members
def create_member(
    session: Session,
    *,
    name: Optional[str] = None,
    subscription_start: Optional[date | str] = None,
    subscription_type: str = "monthly",
    payment_status: str = "pending",
    unique_id: Optional[str] = None,
    age: Optional[int | str] = None,
    date_of_birth: Optional[date | str] = None,
    phone: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
    emergency_contact: Optional[str] = None,
    height: Optional[float | str] = None,
    weight: Optional[float | str] = None,
    body_fat: Optional[float | str] = None,
) -> Member:
    """
    Validate every field, then insert. subscription_end is derived from
    start + type and cannot be supplied. Without a unique_id one is
    generated once the row has its member_id.
    """
    try:
        supplied_id = _normalize_text(unique_id, "Unique ID")
        if subscription_start is None or subscription_start == "":
            raise ValidationError("Subscription start date is required")
        start = parse_iso_date(subscription_start)
        plan_type = normalize_plan_type(subscription_type)
        member = Member(
            unique_id=supplied_id or uuid4().hex,
            name=_normalize_name(name),
            age=_normalize_number(age, "Age", maximum=150, integer=True),
            date_of_birth=_normalize_birth_date(date_of_birth),
            phone=_normalize_text(phone, "Phone"),
            email=_normalize_email(email),
            address=_normalize_text(address, "Address"),
            emergency_contact=_normalize_text(emergency_contact, "Emergency contact"),
            height=_normalize_number(height, "Height", maximum=300),
            weight=_normalize_number(weight, "Weight", maximum=500),
            body_fat=_normalize_number(body_fat, "Body fat", maximum=100),
            subscription_type=plan_type,
            subscription_start=start,
            subscription_end=derive_end_date(start, plan_type),
            payment_status=_normalize_payment_status(payment_status),
        )
    except ValidationError as exc:
        logger.warning("Member creation rejected: %s", exc)
        raise

    session.add(member)
    if supplied_id is None:
        _commit(session, "add member", flush_only=True)
        _assign_unique_id(session, member)
    _commit(session, "add member")
    session.refresh(member)
    logger.info("Created member %s (%s, %s plan)", member.unique_id, member.name, member.subscription_type)
    return member


def get_member(session: Session, member_id: int) -> Member:
    stmt = (
        select(Member)
        .options(
            selectinload(Member.physical_details),
            selectinload(Member.goals_preferences),
            selectinload(Member.activity_performance),
            selectinload(Member.progress_logs),
            selectinload(Member.workout_history),
        )
        .where(Member.member_id == member_id)
    )
    member = session.scalars(stmt).first()
    if not member:
        raise NotFoundError("Member not found")
    return member


def list_members(session: Session) -> list[Member]:
    return list(session.scalars(select(Member).order_by(Member.member_id)))


def list_member_records(session: Session) -> list[dict]:
    return [member_to_record(m) for m in list_members(session)]


def get_member_profile(session: Session, member_id: int) -> dict:
    return build_member_profile(get_member(session, member_id))


# 2. Update members
def update_member(
    session: Session,
    member_id: int,
    **changes,
) -> Member:
    """
    Apply edits to the editable fields. Changing subscription_start or
    subscription_type re-derives subscription_end; unique_id and
    subscription_end themselves are not editable.
    """
    member = session.get(Member, member_id)
    if not member:
        raise NotFoundError("Member not found")

    normalizers = {
        "name": _normalize_name,
        "age": lambda v: _normalize_number(v, "Age", maximum=150, integer=True),
        "date_of_birth": _normalize_birth_date,
        "phone": lambda v: _normalize_text(v, "Phone"),
        "email": _normalize_email,
        "address": lambda v: _normalize_text(v, "Address"),
        "emergency_contact": lambda v: _normalize_text(v, "Emergency contact"),
        "height": lambda v: _normalize_number(v, "Height", maximum=300),
        "weight": lambda v: _normalize_number(v, "Weight", maximum=500),
        "body_fat": lambda v: _normalize_number(v, "Body fat", maximum=100),
        "subscription_type": normalize_plan_type,
        "subscription_start": parse_iso_date,
        "payment_status": _normalize_payment_status,
    }

    try:
        normalized = {}
        for key, value in changes.items():
            if key not in normalizers:
                logger.debug("Ignoring non-editable member field %r", key)
                continue
            normalized[key] = normalizers[key](value)
    except ValidationError as exc:
        logger.warning("Update of member %s rejected: %s", member_id, exc)
        raise

    for key, value in normalized.items():
        setattr(member, key, value)

    if "subscription_start" in normalized or "subscription_type" in normalized:
        member.subscription_end = derive_end_date(member.subscription_start, member.subscription_type)

    _commit(session, "update member")
    session.refresh(member)
    logger.info("Updated member %s: %s", member.unique_id, ", ".join(sorted(normalized)) or "no changes")
    return member


def change_subscription_type(
    session: Session,
    member_id: int,
    new_type: str,
) -> dict:
    """
    Switch a member's plan. The end date is recomputed from the stored
    start date, never from today. Returns the updated record.
    """
    member = session.get(Member, member_id)
    if not member:
        raise NotFoundError("Member not found")

    record = apply_subscription_change(member_to_record(member), new_type)
    member.subscription_type = record["subscription_type"]
    member.subscription_end = parse_iso_date(record["subscription_end"])

    _commit(session, "update subscription")
    logger.info(
        "Member %s moved to %s plan, ends %s",
        member.unique_id, record["subscription_type"], record["subscription_end"],
    )
    return record


# 3. Delete members (nested rows go with them)
def delete_member(session: Session, member_id: int) -> None:
    member = get_member(session, member_id)
    unique_id = member.unique_id
    session.delete(member)
    _commit(session, "delete member")
    logger.info("Deleted member %s", unique_id)


# 4. Optional profile sections
def save_physical_details(
    session: Session,
    member_id: int,
    *,
    chest=None,
    waist=None,
    hips=None,
    arms=None,
    legs=None,
    fitness_level: Optional[str] = None,
) -> PhysicalDetails:
    member = get_member(session, member_id)
    values = {
        "chest": _normalize_number(chest, "Chest", maximum=300),
        "waist": _normalize_number(waist, "Waist", maximum=300),
        "hips": _normalize_number(hips, "Hips", maximum=300),
        "arms": _normalize_number(arms, "Arms", maximum=200),
        "legs": _normalize_number(legs, "Legs", maximum=200),
        "fitness_level": _normalize_choice(fitness_level, "Fitness level", FITNESS_LEVELS),
    }
    details = member.physical_details
    if details is None:
        details = PhysicalDetails(**values)
        member.physical_details = details
    else:
        for key, value in values.items():
            setattr(details, key, value)
    _commit(session, "save physical details")
    session.refresh(details)
    return details


def save_goals_preferences(
    session: Session,
    member_id: int,
    *,
    goals=None,
    timeline: Optional[str] = None,
    workout_frequency=None,
    workout_styles=None,
    diet_preference: Optional[str] = None,
    diet_remarks: Optional[str] = None,
) -> GoalsPreferences:
    member = get_member(session, member_id)
    values = {
        "goals": _normalize_tags(goals),
        "timeline": _normalize_choice(timeline, "Timeline", GOAL_TIMELINES),
        "workout_frequency": _normalize_number(
            workout_frequency, "Workout frequency", maximum=14, integer=True
        ),
        "workout_styles": _normalize_tags(workout_styles),
        "diet_preference": _normalize_text(diet_preference, "Diet preference"),
        "diet_remarks": _normalize_text(diet_remarks, "Diet remarks"),
    }
    goals_row = member.goals_preferences
    if goals_row is None:
        goals_row = GoalsPreferences(**values)
        member.goals_preferences = goals_row
    else:
        for key, value in values.items():
            setattr(goals_row, key, value)
    _commit(session, "save goals and preferences")
    session.refresh(goals_row)
    return goals_row


def save_activity_performance(
    session: Session,
    member_id: int,
    *,
    attendance=None,
    goal_achievement=None,
) -> ActivityPerformance:
    member = get_member(session, member_id)
    values = {
        "attendance": _normalize_number(attendance, "Attendance", maximum=100),
        "goal_achievement": _normalize_number(goal_achievement, "Goal achievement", maximum=100),
    }
    activity = member.activity_performance
    if activity is None:
        activity = ActivityPerformance(**values)
        member.activity_performance = activity
    else:
        for key, value in values.items():
            setattr(activity, key, value)
    _commit(session, "save activity data")
    session.refresh(activity)
    return activity


def log_progress(
    session: Session,
    member_id: int,
    *,
    log_date: date | str,
    weight=None,
    body_fat=None,
) -> ProgressLog:
    member = get_member(session, member_id)
    if log_date is None or log_date == "":
        raise ValidationError("Progress log date is required")
    log = ProgressLog(
        date=parse_iso_date(log_date),
        weight=_normalize_number(weight, "Weight", maximum=500),
        body_fat=_normalize_number(body_fat, "Body fat", maximum=100),
    )
    member.progress_logs.append(log)
    _commit(session, "log progress")
    session.refresh(log)
    return log


def log_workout(
    session: Session,
    member_id: int,
    *,
    workout_date: date | str,
    workout: str,
    duration,
) -> WorkoutHistory:
    member = get_member(session, member_id)
    if workout_date is None or workout_date == "":
        raise ValidationError("Workout date is required")
    workout = _normalize_text(workout, "Workout")
    if not workout:
        raise ValidationError("Workout name is required")
    minutes = _normalize_number(duration, "Duration", maximum=24 * 60, integer=True)
    if not minutes:
        raise ValidationError("Duration must be a positive number of minutes")

    entry = WorkoutHistory(
        date=parse_iso_date(workout_date),
        workout=workout,
        duration=minutes,
    )
    member.workout_history.append(entry)
    _commit(session, "log workout")
    session.refresh(entry)
    return entry
