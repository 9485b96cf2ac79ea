from __future__ import annotations

import datetime as dt

from sqlalchemy import (
    Integer,
    String,
    Date,
    Float,
    ForeignKey,
    Text,
    JSON,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Member(TimestampMixin, Base):
    __tablename__ = "member"
    # SQLite would otherwise reuse the id of the last deleted row
    __table_args__ = {"sqlite_autoincrement": True}

    member_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    unique_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date_of_birth: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    # Contact
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    emergency_contact: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Body stats (cm / kg / %)
    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    body_fat: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Subscription; subscription_end is always derived from start + type
    subscription_type: Mapped[str] = mapped_column(String(20), nullable=False, default="monthly")
    subscription_start: Mapped[dt.date] = mapped_column(Date, nullable=False)
    subscription_end: Mapped[dt.date] = mapped_column(Date, nullable=False)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")

    physical_details: Mapped["PhysicalDetails | None"] = relationship(
        back_populates="member", cascade="all, delete-orphan", uselist=False,
    )
    goals_preferences: Mapped["GoalsPreferences | None"] = relationship(
        back_populates="member", cascade="all, delete-orphan", uselist=False,
    )
    activity_performance: Mapped["ActivityPerformance | None"] = relationship(
        back_populates="member", cascade="all, delete-orphan", uselist=False,
    )
    progress_logs: Mapped[list["ProgressLog"]] = relationship(
        back_populates="member", cascade="all, delete-orphan", order_by="ProgressLog.date",
    )
    workout_history: Mapped[list["WorkoutHistory"]] = relationship(
        back_populates="member", cascade="all, delete-orphan", order_by="WorkoutHistory.date.desc()",
    )

    def __repr__(self) -> str:
        return f"<Member id={self.member_id} unique_id={self.unique_id} plan={self.subscription_type}>"


class PhysicalDetails(TimestampMixin, Base):
    __tablename__ = "physical_details"

    physical_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        ForeignKey("member.member_id", ondelete="CASCADE"), nullable=False, unique=True,
    )

    chest: Mapped[float | None] = mapped_column(Float, nullable=True)
    waist: Mapped[float | None] = mapped_column(Float, nullable=True)
    hips: Mapped[float | None] = mapped_column(Float, nullable=True)
    arms: Mapped[float | None] = mapped_column(Float, nullable=True)
    legs: Mapped[float | None] = mapped_column(Float, nullable=True)
    fitness_level: Mapped[str | None] = mapped_column(String(50), nullable=True)

    member = relationship("Member", back_populates="physical_details")


class GoalsPreferences(TimestampMixin, Base):
    __tablename__ = "goals_preferences"

    goals_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        ForeignKey("member.member_id", ondelete="CASCADE"), nullable=False, unique=True,
    )

    goals: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    timeline: Mapped[str | None] = mapped_column(String(20), nullable=True)
    workout_frequency: Mapped[int | None] = mapped_column(Integer, nullable=True)
    workout_styles: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    diet_preference: Mapped[str | None] = mapped_column(String(100), nullable=True)
    diet_remarks: Mapped[str | None] = mapped_column(Text, nullable=True)

    member = relationship("Member", back_populates="goals_preferences")


class ActivityPerformance(TimestampMixin, Base):
    __tablename__ = "activity_performance"

    activity_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        ForeignKey("member.member_id", ondelete="CASCADE"), nullable=False, unique=True,
    )

    attendance: Mapped[float | None] = mapped_column(Float, nullable=True)  # %
    goal_achievement: Mapped[float | None] = mapped_column(Float, nullable=True)  # %

    member = relationship("Member", back_populates="activity_performance")


class ProgressLog(Base):
    __tablename__ = "progress_log"

    log_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        ForeignKey("member.member_id", ondelete="CASCADE"), nullable=False,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    body_fat: Mapped[float | None] = mapped_column(Float, nullable=True)

    member = relationship("Member", back_populates="progress_logs")


class WorkoutHistory(Base):
    __tablename__ = "workout_history"

    workout_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        ForeignKey("member.member_id", ondelete="CASCADE"), nullable=False,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    workout: Mapped[str] = mapped_column(String(255), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes

    member = relationship("Member", back_populates="workout_history")
