from __future__ import annotations

import logging
import os

from flask import (
    Flask,
    request,
    jsonify,
)

from models.base import get_session
from app.errors import ValidationError, NotFoundError, StorageError
from app.init_db import init_db
from app.member_service import (
    create_member,
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
from app.records import member_to_record, meeting_to_record, progress_log_to_record, workout_to_record
from app.reports import dashboard_summary, reports_summary
from app.schedule_service import create_meeting, list_meetings
from app.subscription import derive_end_date, format_iso_date, new_subscription_defaults
from app.working_set import MemberWorkingSet
from app.demo_data import clear_all_data, seed_demo_data

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev-secret")  # fine for local/demo use only

# Ensure all ORM tables and indexes exist
init_db()

MEMBER_FIELDS = (
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
    "payment_status",
)


def _payload() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _pick(data: dict, fields) -> dict:
    return {key: data[key] for key in fields if key in data}


# -------------------------------------------------
# Error responses
# -------------------------------------------------
@app.errorhandler(ValidationError)
def _validation_error(exc):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(NotFoundError)
def _not_found(exc):
    return jsonify({"error": str(exc)}), 404


@app.errorhandler(StorageError)
def _storage_error(exc):
    return jsonify({"error": str(exc)}), 500


# -------------------------------------------------
# Members
# -------------------------------------------------
@app.get("/api/members")
def members_list():
    """All members, narrowed by ?q= over name / email / unique ID."""
    with get_session() as db:
        view = MemberWorkingSet(list_member_records(db))
    return jsonify({"members": view.search(request.args.get("q"))})


@app.get("/api/members/defaults")
def member_form_defaults():
    return jsonify(new_subscription_defaults())


@app.post("/api/members")
def member_create():
    data = _payload()
    if "subscription_end" in data:
        logger.debug("Ignoring client-supplied subscription_end on create")
    with get_session() as db:
        member = create_member(db, **_pick(data, MEMBER_FIELDS))
        record = member_to_record(member)
    return jsonify({"member": record, "message": f"{record['name']} has been successfully added."}), 201


@app.get("/api/members/<int:member_id>")
def member_detail(member_id: int):
    with get_session() as db:
        profile = get_member_profile(db, member_id)
    return jsonify(profile)


@app.patch("/api/members/<int:member_id>")
def member_update(member_id: int):
    data = _payload()
    with get_session() as db:
        member = update_member(db, member_id, **_pick(data, MEMBER_FIELDS))
        record = member_to_record(member)
    return jsonify({"member": record})


@app.put("/api/members/<int:member_id>/subscription")
def member_change_subscription(member_id: int):
    data = _payload()
    with get_session() as db:
        record = change_subscription_type(db, member_id, data.get("subscription_type"))
    return jsonify({"member": record, "message": "The member's subscription plan has been updated."})


@app.delete("/api/members/<int:member_id>")
def member_delete(member_id: int):
    with get_session() as db:
        delete_member(db, member_id)
    return jsonify({"message": "Member has been deleted successfully."})


# -------------------------------------------------
# Optional profile sections
# -------------------------------------------------
@app.put("/api/members/<int:member_id>/physical-details")
def member_physical_details(member_id: int):
    data = _payload()
    fields = ("chest", "waist", "hips", "arms", "legs", "fitness_level")
    with get_session() as db:
        save_physical_details(db, member_id, **_pick(data, fields))
        profile = get_member_profile(db, member_id)
    return jsonify(profile["sections"]["physical"])


@app.put("/api/members/<int:member_id>/goals")
def member_goals(member_id: int):
    data = _payload()
    fields = (
        "goals",
        "timeline",
        "workout_frequency",
        "workout_styles",
        "diet_preference",
        "diet_remarks",
    )
    with get_session() as db:
        save_goals_preferences(db, member_id, **_pick(data, fields))
        profile = get_member_profile(db, member_id)
    return jsonify(profile["sections"]["goals"])


@app.put("/api/members/<int:member_id>/activity")
def member_activity(member_id: int):
    data = _payload()
    with get_session() as db:
        save_activity_performance(db, member_id, **_pick(data, ("attendance", "goal_achievement")))
        profile = get_member_profile(db, member_id)
    return jsonify(profile["sections"]["activity"])


@app.post("/api/members/<int:member_id>/progress-logs")
def member_log_progress(member_id: int):
    data = _payload()
    with get_session() as db:
        log = log_progress(
            db,
            member_id,
            log_date=data.get("date"),
            weight=data.get("weight"),
            body_fat=data.get("body_fat"),
        )
        record = progress_log_to_record(log)
    return jsonify({"progress_log": record}), 201


@app.post("/api/members/<int:member_id>/workouts")
def member_log_workout(member_id: int):
    data = _payload()
    with get_session() as db:
        entry = log_workout(
            db,
            member_id,
            workout_date=data.get("date"),
            workout=data.get("workout"),
            duration=data.get("duration"),
        )
        record = workout_to_record(entry)
    return jsonify({"workout": record}), 201


# -------------------------------------------------
# Subscriptions & payments
# -------------------------------------------------
@app.get("/api/subscriptions/preview")
def subscription_preview():
    """End date the creation form shows for a given start date and plan."""
    start = request.args.get("start")
    plan_type = request.args.get("type", "monthly")
    if not start:
        raise ValidationError("start is required")
    return jsonify(
        {
            "subscription_type": plan_type,
            "subscription_start": format_iso_date(start),
            "subscription_end": format_iso_date(derive_end_date(start, plan_type)),
        }
    )


@app.get("/api/payments/pending")
def payments_pending():
    with get_session() as db:
        view = MemberWorkingSet(list_member_records(db))
    return jsonify({"pending": view.pending_payments()})


# -------------------------------------------------
# Dashboard & reports (mock series)
# -------------------------------------------------
@app.get("/api/dashboard")
def dashboard():
    with get_session() as db:
        records = list_member_records(db)
    summary = dashboard_summary()
    summary["members"] = records
    return jsonify(summary)


@app.get("/api/reports")
def reports():
    return jsonify(reports_summary())


# -------------------------------------------------
# Schedule
# -------------------------------------------------
@app.get("/api/meetings")
def meetings_list():
    with get_session() as db:
        meetings = list_meetings(db, on_date=request.args.get("date"))
        records = [meeting_to_record(m) for m in meetings]
    return jsonify({"meetings": records})


@app.post("/api/meetings")
def meetings_create():
    data = _payload()
    with get_session() as db:
        meeting = create_meeting(
            db,
            title=data.get("title"),
            meeting_date=data.get("date"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            attendees=data.get("attendees"),
            meeting_type=data.get("meeting_type", "in-person"),
            link=data.get("link"),
            description=data.get("description"),
        )
        record = meeting_to_record(meeting)
    return jsonify({"meeting": record}), 201


# -------------------------------------------------
# Admin
# -------------------------------------------------
@app.post("/api/admin/demo-data")
def admin_demo_data():
    clear_all_data()
    with get_session() as db:
        counts = seed_demo_data(db)
    return jsonify({"message": "Demo data reset.", **counts})


if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(debug=True)
