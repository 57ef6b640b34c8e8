"""
User accounts (students and teachers).
"""
from datetime import datetime

from werkzeug.security import check_password_hash, generate_password_hash

from onlineexam.mongo_adapter import object_id, serialize

ROLES = ("student", "teacher")


def create_user(db, name, email, password, role="student"):
    """
    Insert a new user. Raises ValueError on bad input and
    pymongo.errors.DuplicateKeyError when the email is taken.
    """
    name = (name or "").strip()
    email = (email or "").strip().lower()
    role = (role or "student").strip().lower()

    if not name or not email or not password:
        raise ValueError("name, email and password are required")
    if role not in ROLES:
        raise ValueError(f"role must be one of: {', '.join(ROLES)}")

    doc = {
        "name": name,
        "email": email,
        "passwordHash": generate_password_hash(password),
        "role": role,
        "createdAt": datetime.utcnow(),
    }
    result = db.users.insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


def authenticate(db, email, password):
    """Return the user for valid credentials, else None."""
    user = db.users.find_one({"email": (email or "").strip().lower()})
    if not user or not password:
        return None
    if not check_password_hash(user["passwordHash"], password):
        return None
    return user


def get_user(db, user_id):
    oid = object_id(user_id)
    if oid is None:
        return None
    return db.users.find_one({"_id": oid})


def list_students(db):
    return list(db.users.find({"role": "student"}).sort("name", 1))


def public_user(user):
    """User without credentials."""
    return serialize(user, drop=("passwordHash",))
