from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import ValidationError, StorageError
from app.subscription import parse_iso_date
from models.scheduling import Meeting, MEETING_TYPES

logger = logging.getLogger(__name__)


def _parse_time(value: time | str, field: str) -> time:
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%H:%M").time()
        except ValueError:
            pass
    raise ValidationError(f"{field} must be a time in HH:MM format.")


def _normalize_attendees(attendees: Optional[Iterable[str] | str]) -> list[str]:
    if attendees is None:
        return []
    if isinstance(attendees, str):
        attendees = attendees.split(",")
    return [name.strip() for name in attendees if name and name.strip()]


def create_meeting(
    session: Session,
    *,
    title: str,
    meeting_date: date | str,
    start_time: time | str,
    end_time: time | str,
    attendees: Optional[Iterable[str] | str] = None,
    meeting_type: str = "in-person",
    link: Optional[str] = None,
    description: Optional[str] = None,
) -> Meeting:
    """
    Schedule a meeting. A link is expected for video meetings but not
    required; meeting_to_record() flags it as link_missing instead.
    """
    title = (title or "").strip()
    if not title:
        raise ValidationError("Meeting title is required")
    if meeting_date is None or meeting_date == "":
        raise ValidationError("Meeting date is required")

    start = _parse_time(start_time, "Start time")
    end = _parse_time(end_time, "End time")
    if start >= end:
        raise ValidationError("start_time must be before end_time")

    kind = (meeting_type or "").strip().lower()
    if kind not in MEETING_TYPES:
        raise ValidationError(f"Meeting type must be one of: {', '.join(MEETING_TYPES)}.")

    meeting = Meeting(
        title=title,
        date=parse_iso_date(meeting_date),
        start_time=start,
        end_time=end,
        attendees=_normalize_attendees(attendees),
        meeting_type=kind,
        link=(link or "").strip() or None,
        description=(description or "").strip() or None,
    )
    session.add(meeting)
    try:
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Database error while scheduling meeting %r", title)
        raise StorageError("schedule meeting")
    session.refresh(meeting)

    if meeting.meeting_type != "in-person" and not meeting.link:
        logger.warning("Meeting %s (%s) has no link", meeting.meeting_id, meeting.meeting_type)
    logger.info("Scheduled meeting %s on %s", meeting.title, meeting.date)
    return meeting


def list_meetings(
    session: Session,
    *,
    on_date: Optional[date | str] = None,
    from_date: Optional[date | str] = None,
) -> list[Meeting]:
    stmt = select(Meeting)
    if on_date:
        stmt = stmt.where(Meeting.date == parse_iso_date(on_date))
    if from_date:
        stmt = stmt.where(Meeting.date >= parse_iso_date(from_date))
    stmt = stmt.order_by(Meeting.date, Meeting.start_time)
    return list(session.scalars(stmt))
