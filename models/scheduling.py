import datetime as dt

from sqlalchemy import (
    Integer,
    String,
    Date,
    DateTime,
    Time,
    Text,
    JSON,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

MEETING_TYPES = ("in-person", "zoom", "google-meet", "microsoft-teams")


class Meeting(Base):
    """
    A scheduled meeting or class slot on the gym calendar.
    attendees: list of display names (no FK to members).
    """
    __tablename__ = "meeting"

    meeting_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    start_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    end_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    attendees: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    meeting_type: Mapped[str] = mapped_column(String(32), nullable=False, default="in-person")
    link: Mapped[str | None] = mapped_column(String(512), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Meeting id={self.meeting_id} title={self.title!r} date={self.date}>"
