"""
Auth routes: register, login, logout, current user.
Sessions are kept in Flask's signed session cookie.
"""
from functools import wraps

from flask import Blueprint, g, jsonify, request, session
from pymongo.errors import DuplicateKeyError

from onlineexam.mongo_adapter import get_db
from onlineexam.services import users

auth_bp = Blueprint("auth", __name__)


def current_user():
    user_id = session.get("user_id")
    if not user_id:
        return None
    return users.get_user(get_db(), user_id)


def login_required(role=None):
    """Reject anonymous callers with 401 and callers of another role with 403."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return jsonify({"message": "Authentication required"}), 401
            if role and user["role"] != role:
                return jsonify({"message": "Forbidden"}), 403
            g.user = user
            return view(*args, **kwargs)

        return wrapper

    return decorator


def _login(user):
    session.clear()
    session["user_id"] = str(user["_id"])


@auth_bp.post("/register")
def register():
    data = request.get_json(silent=True) or {}
    try:
        user = users.create_user(
            get_db(),
            data.get("name"),
            data.get("email"),
            data.get("password"),
            data.get("role", "student"),
        )
    except ValueError as e:
        return jsonify({"message": str(e)}), 400
    except DuplicateKeyError:
        return jsonify({"message": "Email already registered"}), 409

    _login(user)
    return jsonify({"user": users.public_user(user)}), 201


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    user = users.authenticate(get_db(), data.get("email"), data.get("password"))
    if user is None:
        return jsonify({"message": "Invalid email or password"}), 401

    _login(user)
    return jsonify({"user": users.public_user(user)})


@auth_bp.post("/logout")
def logout():
    session.clear()
    return jsonify({"ok": True})


@auth_bp.get("/me")
@login_required()
def me():
    return jsonify({"user": users.public_user(g.user)})
