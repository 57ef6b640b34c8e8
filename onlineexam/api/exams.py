"""
Exam routes. Teachers manage their own exams, students read published ones.
"""
from flask import Blueprint, g, jsonify, request

from onlineexam.api.auth import login_required
from onlineexam.mongo_adapter import get_db
from onlineexam.services import exams

exams_bp = Blueprint("exams", __name__)


def _is_owner(user, exam):
    return user["role"] == "teacher" and exam.get("createdBy") == user["_id"]


def _visible(user, exam):
    return _is_owner(user, exam) or (user["role"] == "student" and exam.get("published"))


@exams_bp.get("/", strict_slashes=False)
@login_required()
def list_exams():
    user = g.user
    if user["role"] == "teacher":
        items = exams.list_exams(get_db(), owner_id=user["_id"])
        return jsonify({"exams": [exams.public_exam(e, include_answers=True) for e in items]})

    items = exams.list_exams(get_db(), published_only=True)
    return jsonify({"exams": [exams.public_exam(e) for e in items]})


@exams_bp.post("/", strict_slashes=False)
@login_required(role="teacher")
def create_exam():
    try:
        exam = exams.create_exam(get_db(), request.get_json(silent=True), g.user["_id"])
    except ValueError as e:
        return jsonify({"message": str(e)}), 400
    return jsonify({"exam": exams.public_exam(exam, include_answers=True)}), 201


@exams_bp.get("/<exam_id>")
@login_required()
def get_exam(exam_id):
    exam = exams.get_exam(get_db(), exam_id)
    if not exam or not _visible(g.user, exam):
        return jsonify({"message": "Exam not found"}), 404
    return jsonify({"exam": exams.public_exam(exam, include_answers=_is_owner(g.user, exam))})


@exams_bp.put("/<exam_id>")
@login_required(role="teacher")
def update_exam(exam_id):
    db = get_db()
    exam = exams.get_exam(db, exam_id)
    if not exam or not _is_owner(g.user, exam):
        return jsonify({"message": "Exam not found"}), 404
    try:
        exam = exams.update_exam(db, exam, request.get_json(silent=True))
    except ValueError as e:
        return jsonify({"message": str(e)}), 400
    return jsonify({"exam": exams.public_exam(exam, include_answers=True)})


@exams_bp.delete("/<exam_id>")
@login_required(role="teacher")
def delete_exam(exam_id):
    db = get_db()
    exam = exams.get_exam(db, exam_id)
    if not exam or not _is_owner(g.user, exam):
        return jsonify({"message": "Exam not found"}), 404
    exams.delete_exam(db, exam)
    return jsonify({"ok": True})
