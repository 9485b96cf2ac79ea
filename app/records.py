"""
Marshal ORM rows to the persisted-record shape (plain dicts, dates as
YYYY-MM-DD strings, missing values as None) used by the pure helpers and
the JSON API.
"""
from __future__ import annotations

from typing import Optional

from app.subscription import format_iso_date
from models.member import (
    Member,
    PhysicalDetails,
    GoalsPreferences,
    ActivityPerformance,
    ProgressLog,
    WorkoutHistory,
)
from models.scheduling import Meeting

MEMBER_RECORD_FIELDS = (
    "unique_id",
    "name",
    "age",
    "date_of_birth",
    "phone",
    "email",
    "address",
    "emergency_contact",
    "height",
    "weight",
    "body_fat",
    "subscription_type",
    "subscription_start",
    "subscription_end",
    "payment_status",
)
_DATE_FIELDS = {"date_of_birth", "subscription_start", "subscription_end"}


def member_to_record(member: Member) -> dict:
    record = {"id": member.member_id}
    for field in MEMBER_RECORD_FIELDS:
        value = getattr(member, field)
        if field in _DATE_FIELDS:
            value = format_iso_date(value)
        record[field] = value
    return record


def physical_details_to_record(details: Optional[PhysicalDetails]) -> Optional[dict]:
    if details is None:
        return None
    return {
        "body_measurements": {
            "chest": details.chest,
            "waist": details.waist,
            "hips": details.hips,
            "arms": details.arms,
            "legs": details.legs,
        },
        "fitness_level": details.fitness_level,
    }


def goals_to_record(goals: Optional[GoalsPreferences]) -> Optional[dict]:
    if goals is None:
        return None
    return {
        "goals": list(goals.goals or []),
        "timeline": goals.timeline,
        "workout_frequency": goals.workout_frequency,
        "workout_styles": list(goals.workout_styles or []),
        "diet_preference": goals.diet_preference,
        "diet_remarks": goals.diet_remarks,
    }


def activity_to_record(activity: Optional[ActivityPerformance]) -> Optional[dict]:
    if activity is None:
        return None
    return {
        "attendance": activity.attendance,
        "goal_achievement": activity.goal_achievement,
    }


def progress_log_to_record(log: ProgressLog) -> dict:
    return {
        "id": log.log_id,
        "date": format_iso_date(log.date),
        "weight": log.weight,
        "body_fat": log.body_fat,
    }


def workout_to_record(workout: WorkoutHistory) -> dict:
    return {
        "id": workout.workout_id,
        "date": format_iso_date(workout.date),
        "workout": workout.workout,
        "duration": workout.duration,
    }


def meeting_to_record(meeting: Meeting) -> dict:
    return {
        "id": meeting.meeting_id,
        "title": meeting.title,
        "date": format_iso_date(meeting.date),
        "start_time": meeting.start_time.strftime("%H:%M"),
        "end_time": meeting.end_time.strftime("%H:%M"),
        "attendees": list(meeting.attendees or []),
        "meeting_type": meeting.meeting_type,
        "link": meeting.link,
        "link_missing": meeting.meeting_type != "in-person" and not meeting.link,
        "description": meeting.description,
    }
