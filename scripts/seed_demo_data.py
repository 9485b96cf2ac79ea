# scripts/seed_demo_data.py

import logging
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(ROOT)

# Now imports will work
from models import member, scheduling  # noqa: F401 (register models)
from models.base import get_session
from app.demo_data import clear_all_data, seed_demo_data


def run():
    clear_all_data()
    with get_session() as session:
        counts = seed_demo_data(session)
    print("Demo data ready:")
    print(f"  Members: {counts['members']} (FH10001 - FH10006)")
    print(f"  Meetings: {counts['meetings']}")


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    run()
