"""
Service factories

Each request gets its own session; services are assembled from the
SQLAlchemy repositories bound to that session. The plain builders are
also what tests use to get services over a test session.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from gradebook.crud.courses import CourseRepository, UserRepository
from gradebook.crud.grade_columns import AssignmentRepository, GradeColumnRepository
from gradebook.crud.grade_results import GradeResultRepository
from gradebook.crud.quizzes import QuizRepository, QuizResultRepository
from gradebook.crud.transaction import SessionTransaction
from gradebook.db.session import get_db
from gradebook.services.column_average import ColumnAverager
from gradebook.services.column_quizzes import ColumnQuizService
from gradebook.services.export import ResultExporter
from gradebook.services.grade_columns import GradeColumnService
from gradebook.services.grade_config import GradeConfigService
from gradebook.services.grade_results import GradeResultService
from gradebook.services.weight_validator import WeightValidator


def build_grade_column_service(db: Session) -> GradeColumnService:
    columns = GradeColumnRepository(db)
    return GradeColumnService(
        courses=CourseRepository(db),
        columns=columns,
        assignments=AssignmentRepository(db),
        results=GradeResultRepository(db),
        transaction=SessionTransaction(db),
        weight_validator=WeightValidator(columns),
    )


def build_column_quiz_service(db: Session) -> ColumnQuizService:
    return ColumnQuizService(
        courses=CourseRepository(db),
        columns=GradeColumnRepository(db),
        assignments=AssignmentRepository(db),
        quizzes=QuizRepository(db),
        results=GradeResultRepository(db),
        transaction=SessionTransaction(db),
    )


def build_grade_result_service(db: Session) -> GradeResultService:
    return GradeResultService(
        courses=CourseRepository(db),
        users=UserRepository(db),
        columns=GradeColumnRepository(db),
        results=GradeResultRepository(db),
        averager=ColumnAverager(AssignmentRepository(db), QuizResultRepository(db)),
        transaction=SessionTransaction(db),
    )


def build_grade_config_service(db: Session) -> GradeConfigService:
    return GradeConfigService(CourseRepository(db), GradeResultRepository(db), SessionTransaction(db))


def build_result_exporter(db: Session) -> ResultExporter:
    return ResultExporter(CourseRepository(db), GradeColumnRepository(db), GradeResultRepository(db))


def get_grade_column_service(db: Session = Depends(get_db)) -> GradeColumnService:
    return build_grade_column_service(db)


def get_column_quiz_service(db: Session = Depends(get_db)) -> ColumnQuizService:
    return build_column_quiz_service(db)


def get_grade_result_service(db: Session = Depends(get_db)) -> GradeResultService:
    return build_grade_result_service(db)


def get_grade_config_service(db: Session = Depends(get_db)) -> GradeConfigService:
    return build_grade_config_service(db)


def get_result_exporter(db: Session = Depends(get_db)) -> ResultExporter:
    return build_result_exporter(db)
