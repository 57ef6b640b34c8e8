"""
Submission routes: students submit answers, teachers review results.
"""
from flask import Blueprint, g, jsonify, request
from pymongo.errors import DuplicateKeyError

from onlineexam.api.auth import login_required
from onlineexam.mongo_adapter import get_db
from onlineexam.services import exams, submissions

submissions_bp = Blueprint("submissions", __name__)


@submissions_bp.post("/", strict_slashes=False)
@login_required(role="student")
def submit():
    data = request.get_json(silent=True) or {}
    db = get_db()

    exam = exams.get_exam(db, data.get("examId"))
    if not exam or not exam.get("published"):
        return jsonify({"message": "Exam not found"}), 404

    try:
        doc = submissions.create_submission(db, exam, g.user["_id"], data.get("answers", []))
    except ValueError as e:
        return jsonify({"message": str(e)}), 400
    except DuplicateKeyError:
        return jsonify({"message": "Exam already submitted"}), 409

    return jsonify({"submission": submissions.public_submission(doc)}), 201


@submissions_bp.get("/mine")
@login_required(role="student")
def mine():
    items = submissions.list_for_student(get_db(), g.user["_id"])
    return jsonify({"submissions": [submissions.public_submission(s) for s in items]})


@submissions_bp.get("/exam/<exam_id>")
@login_required(role="teacher")
def for_exam(exam_id):
    db = get_db()
    exam = exams.get_exam(db, exam_id)
    if not exam or exam.get("createdBy") != g.user["_id"]:
        return jsonify({"message": "Exam not found"}), 404

    items = submissions.list_for_exam(db, exam["_id"])
    return jsonify({"submissions": [submissions.public_submission(s) for s in items]})
