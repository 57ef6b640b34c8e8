"""
Exam definitions: validation, storage and the student-facing view.
"""
from datetime import datetime

from onlineexam.mongo_adapter import object_id, serialize

EDITABLE_FIELDS = ("title", "description", "durationMinutes", "questions", "published")


def _validate_questions(questions):
    if not isinstance(questions, list):
        raise ValueError("questions must be a list")

    cleaned = []
    for idx, q in enumerate(questions):
        if not isinstance(q, dict):
            raise ValueError(f"question {idx} must be an object")
        prompt = (q.get("prompt") or "").strip()
        options = q.get("options")
        answer = q.get("answerIndex")

        if not prompt:
            raise ValueError(f"question {idx} needs a prompt")
        if not isinstance(options, list) or len(options) < 2:
            raise ValueError(f"question {idx} needs at least two options")
        if isinstance(answer, bool) or not isinstance(answer, int) or not 0 <= answer < len(options):
            raise ValueError(f"question {idx} has an invalid answerIndex")

        cleaned.append({
            "prompt": prompt,
            "options": [str(o) for o in options],
            "answerIndex": answer,
        })
    return cleaned


def _validate_fields(data, partial=False):
    fields = {}

    if "title" in data or not partial:
        title = (data.get("title") or "").strip()
        if not title:
            raise ValueError("title is required")
        fields["title"] = title

    if "description" in data or not partial:
        fields["description"] = (data.get("description") or "").strip()

    if "durationMinutes" in data or not partial:
        duration = data.get("durationMinutes", 30)
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise ValueError("durationMinutes must be a positive integer")
        fields["durationMinutes"] = duration

    if "questions" in data or not partial:
        fields["questions"] = _validate_questions(data.get("questions") or [])

    if "published" in data or not partial:
        fields["published"] = bool(data.get("published", False))

    return fields


def create_exam(db, data, owner_id):
    fields = _validate_fields(data or {})
    now = datetime.utcnow()
    doc = {**fields, "createdBy": owner_id, "createdAt": now, "updatedAt": now}
    result = db.exams.insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


def update_exam(db, exam, data):
    """Apply a partial update. Unknown fields are ignored."""
    data = {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS}
    fields = _validate_fields(data, partial=True)
    if not fields:
        return exam
    fields["updatedAt"] = datetime.utcnow()
    db.exams.update_one({"_id": exam["_id"]}, {"$set": fields})
    return db.exams.find_one({"_id": exam["_id"]})


def delete_exam(db, exam):
    db.exams.delete_one({"_id": exam["_id"]})
    db.submissions.delete_many({"examId": exam["_id"]})


def get_exam(db, exam_id):
    oid = object_id(exam_id)
    if oid is None:
        return None
    return db.exams.find_one({"_id": oid})


def list_exams(db, owner_id=None, published_only=False):
    query = {}
    if owner_id is not None:
        query["createdBy"] = owner_id
    if published_only:
        query["published"] = True
    return list(db.exams.find(query).sort("createdAt", -1))


def public_exam(exam, include_answers=False):
    """Exam as sent to clients. Students get questions without answerIndex."""
    out = serialize(exam)
    if out is None:
        return None
    if not include_answers:
        out["questions"] = [
            {"prompt": q["prompt"], "options": q["options"]}
            for q in out.get("questions", [])
        ]
    return out
