import logging

from sqlalchemy import text

from models import member, scheduling  # noqa: F401
from models.base import Base, engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    # Create all ORM tables
    Base.metadata.create_all(bind=engine)

    # Indexes for the list / payments screens (valid on Postgres and SQLite)
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                CREATE INDEX IF NOT EXISTS idx_member_payment_status
                ON member(payment_status);
                """
            )
        )
        conn.execute(
            text(
                """
                CREATE INDEX IF NOT EXISTS idx_member_name
                ON member(name);
                """
            )
        )
        conn.execute(
            text(
                """
                CREATE INDEX IF NOT EXISTS idx_progress_log_member_id
                ON progress_log(member_id, date);
                """
            )
        )
        conn.execute(
            text(
                """
                CREATE INDEX IF NOT EXISTS idx_workout_history_member_id
                ON workout_history(member_id);
                """
            )
        )
        conn.execute(
            text(
                """
                CREATE INDEX IF NOT EXISTS idx_meeting_date
                ON meeting(date);
                """
            )
        )
    logger.info("Database tables and indexes ready")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    print("Database tables + indexes created.")
