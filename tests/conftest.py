import os
import tempfile

# Settings are read once; point them at throwaway locations before gradebook is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="gradebook-logs-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gradebook.db.init_db import init_db
from gradebook.db.session import get_db
from gradebook.dependencies.services import (
    build_column_quiz_service,
    build_grade_column_service,
    build_grade_config_service,
    build_grade_result_service,
    build_result_exporter,
)
from gradebook.models.course import Course
from gradebook.models.quiz import Quiz, QuizResult
from gradebook.models.user import User


class Factory:
    """Creates the rows grading reads from but never writes: courses, students, quizzes, results"""

    def __init__(self, db):
        self.db = db
        self._count = 0

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        return obj

    def course(self, name="Algorithms", grade_config=None):
        return self._save(Course(name=name, grade_config=grade_config))

    def student(self, name, courses=()):
        self._count += 1
        user = User(name=name, email=f"{name.lower().replace(' ', '.')}.{self._count}@example.edu")
        user.courses.extend(courses)
        return self._save(user)

    def quiz(self, course, name=None):
        self._count += 1
        return self._save(Quiz(course_id=course.id, name=name or f"Quiz {self._count}"))

    def result(self, quiz, student, score):
        return self._save(QuizResult(quiz_id=quiz.id, user_id=student.id, score=score))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make(db):
    return Factory(db)


@pytest.fixture
def column_service(db):
    return build_grade_column_service(db)


@pytest.fixture
def quiz_service(db):
    return build_column_quiz_service(db)


@pytest.fixture
def result_service(db):
    return build_grade_result_service(db)


@pytest.fixture
def config_service(db):
    return build_grade_config_service(db)


@pytest.fixture
def exporter(db):
    return build_result_exporter(db)


@pytest.fixture
def client(db):
    from gradebook.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def graded_course(make, column_service, quiz_service):
    """
    Midterm 40% (two quizzes) and Final lab 60% (one quiz).
    Alice averages 8.0 on the midterm and 6.0 on the lab.
    """
    course = make.course()
    alice = make.student("Alice", courses=[course])
    midterm = column_service.create_column(course.id, "Midterm", 40)
    lab = column_service.create_column(course.id, "Final lab", 60)
    q1, q2, q3 = make.quiz(course), make.quiz(course), make.quiz(course)
    quiz_service.assign_quiz(midterm.id, q1.id)
    quiz_service.assign_quiz(midterm.id, q2.id)
    quiz_service.assign_quiz(lab.id, q3.id)
    make.result(q1, alice, 7.0)
    make.result(q2, alice, 9.0)
    make.result(q3, alice, 6.0)
    return {
        "course": course,
        "alice": alice,
        "midterm": midterm,
        "lab": lab,
        "quizzes": (q1, q2, q3),
    }
