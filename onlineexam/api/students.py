"""
Student directory for teachers.
"""
from flask import Blueprint, jsonify

from onlineexam.api.auth import login_required
from onlineexam.mongo_adapter import get_db
from onlineexam.services import submissions, users

students_bp = Blueprint("students", __name__)


@students_bp.get("/", strict_slashes=False)
@login_required(role="teacher")
def list_students():
    items = users.list_students(get_db())
    return jsonify({"students": [users.public_user(u) for u in items]})


@students_bp.get("/<student_id>")
@login_required(role="teacher")
def get_student(student_id):
    db = get_db()
    student = users.get_user(db, student_id)
    if not student or student["role"] != "student":
        return jsonify({"message": "Student not found"}), 404

    subs = submissions.list_for_student(db, student["_id"])
    return jsonify({
        "student": users.public_user(student),
        "submissions": [submissions.public_submission(s) for s in subs],
    })
