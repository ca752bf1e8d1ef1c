"""
Account route handlers.

Provides routes for:
- User registration (POST /users)
- User login (POST /login)
- Profile retrieval (GET /users/<user_id>)

Password hashing is delegated to `auth_service.utils`.
"""

import logging
from typing import Tuple, Dict, Any

import psycopg2.errors
from flask import Blueprint, request, jsonify, Response

from event_registration.database.db_connection import get_db
from event_registration.auth_service.utils import hash_password, verify_password
from event_registration.gateway.errors import error_response
from event_registration.utils import json_body, parse_id

auth_bp = Blueprint("auth", __name__)


# --- REQUEST LOGGING ---
@auth_bp.before_request
def before_request() -> None:
    """
    Log every incoming request method and path handled by this blueprint.
    Bodies are not logged since they carry passwords.
    """
    logging.info(f"[Auth] Incoming {request.method} {request.path}")


@auth_bp.after_request
def after_request(response: Response) -> Response:
    """
    Log the response status code for every request.

    Args:
        response (Response): The Flask response object.

    Returns:
        Response: The passed-through response object.
    """
    logging.info(f"[Auth] Response {response.status}")
    return response


# --- REGISTER ---
@auth_bp.route("/users", methods=["POST"])
def register() -> Tuple[Response, int]:
    """
    Register a new user account.

    Expects a JSON body with:
    - username (str): Unique username.
    - email (str): Unique email address.
    - password (str)

    Returns:
        201: JSON with userId, username and email.
        400: Missing fields, or username/email already taken.
        500: Server-side error (hashing or database).
    """
    data: Dict[str, Any] = json_body()
    username = data.get("username")
    email = data.get("email")
    password = data.get("password")

    if not all([username, email, password]):
        return jsonify({"error": "Missing required fields"}), 400
    if not all(isinstance(v, str) for v in (username, email, password)):
        return jsonify({"error": "username, email and password must be strings"}), 400

    check_sql = "SELECT user_id FROM users WHERE username = %s OR email = %s;"
    insert_sql = """
        INSERT INTO users (username, email, password_hash)
        VALUES (%s, %s, %s)
        RETURNING user_id AS "userId", username, email;
    """

    try:
        with get_db() as conn:
            with conn.cursor() as cur:
                cur.execute(check_sql, (username, email))
                if cur.fetchone():
                    return jsonify({"error": "Username or email already exists"}), 400

                cur.execute(insert_sql, (username, email, hash_password(password)))
                user = cur.fetchone()
    except psycopg2.errors.UniqueViolation:
        # Lost a race with a concurrent registration for the same key
        return jsonify({"error": "Username or email already exists"}), 400
    except Exception as e:
        logging.exception(f"Registration error: {e}")
        return error_response("Registration failed", 500, e)

    return jsonify(dict(user)), 201


# --- LOGIN ---
@auth_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Check a username/password pair.

    Expects a JSON body with:
    - username (str)
    - password (str)

    Returns:
        200: {"success": true, "user": {userId, username, email}}
        400: Missing credentials.
        401: Invalid credentials (unknown user or wrong password).
        500: Database error.
    """
    data: Dict[str, Any] = json_body()
    username = data.get("username")
    password = data.get("password")

    if not username or not password:
        return jsonify({"error": "Username and password are required"}), 400

    # A non-string value can never match a stored username or hash
    if not isinstance(username, str) or not isinstance(password, str):
        return jsonify({"error": "Invalid credentials"}), 401

    sql = """
        SELECT user_id AS "userId", username, email, password_hash
        FROM users
        WHERE username = %s;
    """

    try:
        with get_db() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (username,))
                user = cur.fetchone()
    except Exception as e:
        logging.exception(f"Login error: {e}")
        return error_response("Login failed", 500, e)

    if not user or not verify_password(user["password_hash"], password):
        return jsonify({"error": "Invalid credentials"}), 401

    # Never send the hash back
    user = dict(user)
    user.pop("password_hash", None)

    return jsonify({"success": True, "user": user}), 200


# --- USER PROFILE ---
@auth_bp.route("/users/<user_id>", methods=["GET"])
def get_user(user_id: str) -> Tuple[Response, int]:
    """
    Retrieve a user's public profile.

    Returns:
        200: {userId, username, email}
        400: user_id is not a number.
        404: User not found.
        500: Database error.
    """
    uid = parse_id(user_id)
    if uid is None:
        return jsonify({"error": "Invalid userId format. Must be a number."}), 400

    sql = """
        SELECT user_id AS "userId", username, email
        FROM users
        WHERE user_id = %s;
    """

    try:
        with get_db() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (uid,))
                user = cur.fetchone()
    except Exception as e:
        logging.exception(f"Error fetching user profile: {e}")
        return error_response("Failed to fetch user profile", 500, e)

    if not user:
        return jsonify({"error": "User not found"}), 404

    return jsonify(dict(user)), 200
