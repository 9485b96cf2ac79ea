import os
from datetime import datetime

from dotenv import load_dotenv
from sqlalchemy import create_engine, event, func, DateTime
from sqlalchemy.orm import declarative_base, sessionmaker, Mapped, mapped_column

load_dotenv()  # loads DATABASE_URL / SQL_ECHO from .env if present

DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    raise RuntimeError(
        "DATABASE_URL is not set. "
        "Set it in your environment or .env file."
    )

SQL_ECHO = os.getenv("SQL_ECHO", "").lower() in {"1", "true", "yes"}

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, future=True)


if engine.dialect.name == "sqlite":
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
    expire_on_commit=False,
)

Base = declarative_base()


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


def get_session():
    """Helper to get a new member-store DB session."""
    return SessionLocal()
