"""
Events service routes: browse events and register users for them.

Provides routes for:
- Event listing (GET /events)
- Event detail (GET /events/<event_id>)
- Event registration (POST /register-event)
- A user's registrations (GET /user-events/<user_id>)
"""

import logging
from datetime import datetime, timezone
from typing import Tuple, Dict, Any

import psycopg2.errors
from flask import Blueprint, request, jsonify, Response

from event_registration.database.db_connection import get_db
from event_registration.gateway.errors import error_response
from event_registration.utils import json_body, parse_id, serialize_row, format_long_date

events_bp = Blueprint("events", __name__)


# --- REQUEST LOGGING ---
@events_bp.before_request
def before_request() -> None:
    logging.info(f"[Events] Incoming {request.method} {request.path}")


@events_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Events] Response {response.status}")
    return response


@events_bp.route("/events", methods=["GET"])
def list_events() -> Tuple[Response, int]:
    """
    Return every event.

    Returns:
        200: List of event objects.
        500: Database error.
    """
    sql = """
        SELECT
            event_id AS "eventId",
            event_name AS "eventName",
            event_description AS "eventDescription",
            event_date AS "eventDate",
            event_location AS "eventLocation",
            event_image AS "eventImage"
        FROM events;
    """

    try:
        with get_db() as conn:
            with conn.cursor() as cur:
                cur.execute(sql)
                rows = [serialize_row(r, ["eventDate"]) for r in cur.fetchall()]
    except Exception as e:
        logging.exception(f"Error fetching events: {e}")
        return error_response("Database query failed", 500, e)

    return jsonify(rows), 200


@events_bp.route("/events/<event_id>", methods=["GET"])
def get_event(event_id: str) -> Tuple[Response, int]:
    """
    Get a single event by ID, shaped for the event detail page.

    The date is rendered as "Month D, YYYY" and the columns are renamed
    to id, eventName, description, date, location and image.

    Returns:
        200: Event object.
        400: event_id is not a number.
        404: Event not found.
        500: Database error.
    """
    eid = parse_id(event_id)
    if eid is None:
        return jsonify({"error": "Invalid eventId format. Must be a number."}), 400

    sql = """
        SELECT
            event_id AS id,
            event_name AS "eventName",
            event_description AS description,
            event_date AS date,
            event_location AS location,
            event_image AS image
        FROM events
        WHERE event_id = %s;
    """

    try:
        with get_db() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (eid,))
                event = cur.fetchone()
    except Exception as e:
        logging.exception(f"Error fetching event: {e}")
        return error_response("Failed to fetch event", 500, e)

    if not event:
        return jsonify({"error": "Event not found"}), 404

    event = dict(event)
    event["date"] = format_long_date(event.get("date"))

    return jsonify(event), 200


@events_bp.route("/register-event", methods=["POST"])
def register_event() -> Tuple[Response, int]:
    """
    Register a user for an event.

    Expects a JSON body with:
    - userId (int or numeric string)
    - eventId (int or numeric string)
    - username, email, eventTitle (str): copied onto the registration.

    The existence checks, duplicate check and insert run in one transaction.
    The (user_id, event_id) unique constraint is the backstop for races.

    Returns:
        201: {"message": ..., "data": <inserted registration>}
        400: Missing/invalid fields or already registered.
        404: User or event not found.
        500: Database error.
    """
    data: Dict[str, Any] = json_body()
    user_id = data.get("userId")
    event_id = data.get("eventId")
    username = data.get("username")
    email = data.get("email")
    event_title = data.get("eventTitle")

    if not all([user_id, event_id, username, email, event_title]):
        return jsonify({"error": "Missing required fields"}), 400
    if not all(isinstance(v, str) for v in (username, email, event_title)):
        return jsonify({"error": "username, email and eventTitle must be strings"}), 400

    logging.info(f"[Events] Registration attempt: user={user_id} event={event_id}")

    uid = parse_id(user_id)
    eid = parse_id(event_id)
    if uid is None or eid is None:
        return jsonify({"error": "Invalid userId or eventId format. Must be numbers."}), 400

    insert_sql = """
        INSERT INTO user_events
            (user_id, event_id, username, email, event_title, registration_date)
        VALUES (%s, %s, %s, %s, %s, %s)
        RETURNING
            registration_id AS "registrationId",
            user_id AS "userId",
            event_id AS "eventId",
            username,
            email,
            event_title AS "eventTitle",
            registration_date AS "registrationDate";
    """

    try:
        with get_db() as conn:
            with conn.cursor() as cur:
                # Verify that both the user and the event exist
                cur.execute("SELECT COUNT(*) AS count FROM users WHERE user_id = %s;", (uid,))
                if cur.fetchone()["count"] == 0:
                    return jsonify({"error": "User not found"}), 404

                cur.execute("SELECT COUNT(*) AS count FROM events WHERE event_id = %s;", (eid,))
                if cur.fetchone()["count"] == 0:
                    return jsonify({"error": "Event not found"}), 404

                cur.execute(
                    "SELECT registration_id FROM user_events WHERE user_id = %s AND event_id = %s;",
                    (uid, eid),
                )
                if cur.fetchone():
                    return jsonify({"error": "User is already registered for this event"}), 400

                cur.execute(
                    insert_sql,
                    (uid, eid, username, email, event_title, datetime.now(timezone.utc)),
                )
                if cur.rowcount == 0:
                    raise RuntimeError("Insert operation did not affect any rows")
                registration = cur.fetchone()

    except psycopg2.errors.ForeignKeyViolation as e:
        logging.warning(f"Event registration rejected by foreign key: {e}")
        return error_response(
            "Registration failed due to foreign key constraint. User or event may not exist.",
            400,
            e,
        )
    except psycopg2.errors.UniqueViolation as e:
        logging.warning(f"Duplicate event registration: {e}")
        return error_response("User is already registered for this event", 400, e)
    except Exception as e:
        logging.exception(f"Event registration error: {e}")
        return error_response("Failed to register for event", 500, e, include_stack=True)

    return jsonify({
        "message": "Successfully registered for event",
        "data": serialize_row(registration, ["registrationDate"]),
    }), 201


@events_bp.route("/user-events/<user_id>", methods=["GET"])
def list_user_events(user_id: str) -> Tuple[Response, int]:
    """
    List the events a user has registered for, most recent registration first.

    Returns:
        200: List of registrations joined with event details.
        400: user_id is not a number.
        500: Database error.
    """
    uid = parse_id(user_id)
    if uid is None:
        return jsonify({"error": "Invalid userId format. Must be a number."}), 400

    sql = """
        SELECT
            ue.registration_id AS "registrationId",
            ue.event_id AS "eventId",
            ue.user_id AS "userId",
            ue.username,
            ue.email,
            ue.event_title AS "eventTitle",
            ue.registration_date AS "registrationDate",
            e.event_date AS "eventDate",
            e.event_location AS "eventLocation",
            e.event_description AS "eventDescription"
        FROM user_events ue
        LEFT JOIN events e ON ue.event_id = e.event_id
        WHERE ue.user_id = %s
        ORDER BY ue.registration_date DESC;
    """

    try:
        with get_db() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (uid,))
                rows = [
                    serialize_row(r, ["registrationDate", "eventDate"])
                    for r in cur.fetchall()
                ]
    except Exception as e:
        logging.exception(f"Error fetching user events: {e}")
        return error_response("Failed to fetch user events", 500, e)

    return jsonify(rows), 200
