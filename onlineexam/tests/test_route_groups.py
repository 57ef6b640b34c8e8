from onlineexam.tests.conftest import signup

EXAM = {
    "title": "Algebra 101",
    "description": "Midterm",
    "durationMinutes": 45,
    "published": True,
    "questions": [
        {"prompt": "1 + 1", "options": ["1", "2", "3"], "answerIndex": 1},
        {"prompt": "2 * 3", "options": ["5", "6"], "answerIndex": 1},
    ],
}


def _create_exam(teacher, **overrides):
    resp = teacher.post("/api/exams/", json={**EXAM, **overrides})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["exam"]


# --------------------------------
# auth
# --------------------------------

def test_register_login_me_logout(client):
    user = signup(client, "student", "Alice@Example.com", name="Alice")
    assert user["email"] == "alice@example.com"
    assert "passwordHash" not in user

    assert client.get("/api/auth/me").get_json()["user"]["id"] == user["id"]

    assert client.post("/api/auth/logout").get_json() == {"ok": True}
    assert client.get("/api/auth/me").status_code == 401

    resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "pw-123456"})
    assert resp.status_code == 200
    assert client.get("/api/auth/me").status_code == 200


def test_register_validation_and_duplicates(client):
    assert client.post("/api/auth/register", json={"email": "a@b.c"}).status_code == 400
    bad_role = client.post("/api/auth/register", json={
        "name": "x", "email": "a@b.c", "password": "p", "role": "admin",
    })
    assert bad_role.status_code == 400

    signup(client, "student", "dup@example.com")
    resp = client.post("/api/auth/register", json={
        "name": "x", "email": "dup@example.com", "password": "p",
    })
    assert resp.status_code == 409


def test_login_rejects_bad_password(client):
    signup(client, "student", "bob@example.com")
    resp = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "wrong"})
    assert resp.status_code == 401


# --------------------------------
# exams
# --------------------------------

def test_students_cannot_create_exams(student):
    assert student.post("/api/exams/", json=EXAM).status_code == 403


def test_anonymous_exam_access_rejected(client):
    assert client.get("/api/exams/").status_code == 401


def test_exam_validation(teacher):
    resp = teacher.post("/api/exams/", json={**EXAM, "questions": [{"prompt": "q", "options": ["a"], "answerIndex": 0}]})
    assert resp.status_code == 400
    assert teacher.post("/api/exams/", json={**EXAM, "title": ""}).status_code == 400


def test_students_see_published_exams_without_answers(teacher, student):
    published = _create_exam(teacher)
    _create_exam(teacher, title="Draft", published=False)

    assert len(teacher.get("/api/exams/").get_json()["exams"]) == 2

    exams = student.get("/api/exams/").get_json()["exams"]
    assert [e["title"] for e in exams] == ["Algebra 101"]
    assert all("answerIndex" not in q for q in exams[0]["questions"])

    one = student.get(f"/api/exams/{published['id']}").get_json()["exam"]
    assert "answerIndex" not in one["questions"][0]


def test_unpublished_or_unknown_exam_hidden_from_students(teacher, student):
    draft = _create_exam(teacher, published=False)
    assert student.get(f"/api/exams/{draft['id']}").status_code == 404
    assert student.get("/api/exams/not-an-id").status_code == 404


def test_update_and_delete_exam(teacher):
    exam = _create_exam(teacher, published=False)

    resp = teacher.put(f"/api/exams/{exam['id']}", json={"published": True, "title": "Renamed"})
    assert resp.status_code == 200
    updated = resp.get_json()["exam"]
    assert updated["published"] is True
    assert updated["title"] == "Renamed"
    assert updated["durationMinutes"] == 45

    assert teacher.put(f"/api/exams/{exam['id']}", json={"durationMinutes": 0}).status_code == 400

    assert teacher.delete(f"/api/exams/{exam['id']}").get_json() == {"ok": True}
    assert teacher.get(f"/api/exams/{exam['id']}").status_code == 404


def test_other_teacher_cannot_edit(app, teacher):
    exam = _create_exam(teacher)
    other = app.test_client()
    signup(other, "teacher", "other@example.com")
    assert other.put(f"/api/exams/{exam['id']}", json={"title": "mine"}).status_code == 404


# --------------------------------
# submissions and students
# --------------------------------

def test_submission_is_graded_once(teacher, student):
    exam = _create_exam(teacher)

    resp = student.post("/api/submissions/", json={"examId": exam["id"], "answers": [1, 0]})
    assert resp.status_code == 201
    sub = resp.get_json()["submission"]
    assert (sub["score"], sub["total"]) == (1, 2)
    assert sub["examId"] == exam["id"]

    again = student.post("/api/submissions/", json={"examId": exam["id"], "answers": [1, 1]})
    assert again.status_code == 409

    mine = student.get("/api/submissions/mine").get_json()["submissions"]
    assert len(mine) == 1

    results = teacher.get(f"/api/submissions/exam/{exam['id']}").get_json()["submissions"]
    assert [s["score"] for s in results] == [1]


def test_submission_rejects_bad_answers_and_drafts(teacher, student):
    exam = _create_exam(teacher)
    draft = _create_exam(teacher, published=False)

    assert student.post("/api/submissions/", json={"examId": exam["id"], "answers": "1,0"}).status_code == 400
    assert student.post("/api/submissions/", json={"examId": exam["id"], "answers": [0, 0, 0]}).status_code == 400
    assert student.post("/api/submissions/", json={"examId": draft["id"], "answers": []}).status_code == 404
    assert teacher.post("/api/submissions/", json={"examId": exam["id"], "answers": []}).status_code == 403


def test_students_directory(teacher, student):
    exam = _create_exam(teacher)
    student.post("/api/submissions/", json={"examId": exam["id"], "answers": [1, 1]})

    listing = teacher.get("/api/students/").get_json()["students"]
    assert [s["email"] for s in listing] == ["student@example.com"]

    detail = teacher.get(f"/api/students/{listing[0]['id']}").get_json()
    assert detail["student"]["name"] == "Sam Student"
    assert detail["submissions"][0]["score"] == 2

    assert student.get("/api/students/").status_code == 403
    assert teacher.get("/api/students/0123456789abcdef01234567").status_code == 404


def test_bare_prefixes_are_served_without_redirect(teacher, student):
    resp = teacher.post("/api/exams", json=EXAM)
    assert resp.status_code == 201
    exam = resp.get_json()["exam"]

    assert teacher.get("/api/exams").status_code == 200
    assert teacher.get("/api/students").status_code == 200

    resp = student.post("/api/submissions", json={"examId": exam["id"], "answers": [1, 1]})
    assert resp.status_code == 201


def test_preflight_on_bare_prefix(client):
    resp = client.options("/api/exams", headers={
        "Origin": "http://exam.test",
        "Access-Control-Request-Method": "POST",
    })
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "http://exam.test"
    assert resp.headers["Access-Control-Allow-Credentials"] == "true"
