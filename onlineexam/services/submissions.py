"""
Exam submissions and grading.
"""
from datetime import datetime

from onlineexam.mongo_adapter import serialize


def grade(exam, answers):
    """Count answers matching each question's answerIndex. Returns (score, total)."""
    questions = exam.get("questions", [])
    score = 0
    for idx, q in enumerate(questions):
        if idx < len(answers) and answers[idx] == q["answerIndex"]:
            score += 1
    return score, len(questions)


def create_submission(db, exam, student_id, answers):
    """
    Grade and store a submission.
    Raises ValueError on bad answers and DuplicateKeyError on a resubmission.
    """
    if not isinstance(answers, list):
        raise ValueError("answers must be a list")
    if len(answers) > len(exam.get("questions", [])):
        raise ValueError("more answers than questions")
    for a in answers:
        if a is not None and (isinstance(a, bool) or not isinstance(a, int)):
            raise ValueError("answers must be option indexes or null")

    score, total = grade(exam, answers)
    doc = {
        "examId": exam["_id"],
        "studentId": student_id,
        "answers": answers,
        "score": score,
        "total": total,
        "submittedAt": datetime.utcnow(),
    }
    result = db.submissions.insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


def list_for_student(db, student_id):
    return list(db.submissions.find({"studentId": student_id}).sort("submittedAt", -1))


def list_for_exam(db, exam_id):
    return list(db.submissions.find({"examId": exam_id}).sort("submittedAt", -1))


def public_submission(doc):
    return serialize(doc)
