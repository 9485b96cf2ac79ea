from __future__ import annotations

import logging
from datetime import date, time

from sqlalchemy.orm import Session

from models.base import Base, engine
from app import init_db
from app.member_service import (
    create_member,
    save_physical_details,
    save_goals_preferences,
    save_activity_performance,
    log_progress,
    log_workout,
)
from app.schedule_service import create_meeting

logger = logging.getLogger(__name__)

DEMO_MEMBERS = [
    ("FH10001", "John Doe", 28, 178, 75.0, "monthly", date(2025, 3, 1), "paid"),
    ("FH10002", "Emma Wilson", 24, 165, 58.0, "quarterly", date(2025, 2, 15), "paid"),
    ("FH10003", "Michael Smith", 32, 183, None, "annual", date(2025, 1, 10), "paid"),
    ("FH10004", "Sarah Johnson", 29, 170, 64.5, "monthly", date(2025, 3, 15), "pending"),
    ("FH10005", "Robert Brown", 35, 180, 92.0, "quarterly", date(2024, 12, 20), "overdue"),
    ("FH10006", "Lisa Cooper", 27, 163, None, "annual", date(2024, 9, 5), "paid"),
]


def clear_all_data() -> None:
    """Drop and recreate all tables and indexes."""
    Base.metadata.drop_all(bind=engine)
    init_db.init_db()


def seed_demo_data(session: Session) -> dict:
    """
    Seed the six dashboard demo members (John Doe has every profile
    section filled in) plus a couple of meetings.
    Expects empty tables; call clear_all_data() first when reseeding.
    """
    members = []
    for unique_id, name, age, height, weight, plan, start, status in DEMO_MEMBERS:
        first = name.split()[0].lower()
        members.append(
            create_member(
                session,
                unique_id=unique_id,
                name=name,
                age=age,
                height=height,
                weight=weight,
                email=f"{first}@example.com",
                subscription_type=plan,
                subscription_start=start,
                payment_status=status,
            )
        )

    john = members[0]
    save_physical_details(
        session, john.member_id,
        chest=102, waist=84, hips=98, arms=36, legs=58, fitness_level="intermediate",
    )
    save_goals_preferences(
        session, john.member_id,
        goals=["weight loss", "endurance"],
        timeline="short term",
        workout_frequency=4,
        workout_styles=["cardio", "strength"],
        diet_preference="high protein",
    )
    save_activity_performance(session, john.member_id, attendance=85, goal_achievement=60)
    for log_date, weight, body_fat in [
        (date(2025, 3, 1), 78.0, 22.0),
        (date(2025, 3, 15), 76.8, 21.4),
        (date(2025, 3, 29), 75.0, 20.6),
    ]:
        log_progress(session, john.member_id, log_date=log_date, weight=weight, body_fat=body_fat)
    log_workout(session, john.member_id, workout_date=date(2025, 3, 28), workout="HIIT Circuit", duration=45)
    log_workout(session, john.member_id, workout_date=date(2025, 3, 30), workout="Upper Body Strength", duration=60)

    meetings = [
        create_meeting(
            session,
            title="Trainer sync",
            meeting_date=date(2025, 4, 2),
            start_time=time(9, 0),
            end_time=time(9, 30),
            attendees=["Mike", "Emma Wilson"],
        ),
        create_meeting(
            session,
            title="Nutrition check-in",
            meeting_date=date(2025, 4, 3),
            start_time=time(17, 0),
            end_time=time(17, 45),
            attendees=["Mike", "John Doe"],
            meeting_type="zoom",
            link="https://zoom.us/j/1234567890",
            description="Review the high-protein plan.",
        ),
    ]
    logger.info("Seeded %d demo members and %d meetings", len(members), len(meetings))
    return {"members": len(members), "meetings": len(meetings)}
