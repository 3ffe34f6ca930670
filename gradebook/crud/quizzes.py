from typing import Iterable, Optional

from sqlalchemy.orm import Session

from gradebook.models.quiz import Quiz, QuizResult
from gradebook.ports.quizzes import IQuizRepository, IQuizResultRepository


class QuizRepository(IQuizRepository):
    def __init__(self, db: Session):
        self.db = db

    def get(self, quiz_id: int) -> Optional[Quiz]:
        return self.db.query(Quiz).filter(Quiz.id == quiz_id).first()

    def list_for_course(self, course_id: int) -> list[Quiz]:
        return self.db.query(Quiz).filter(Quiz.course_id == course_id).order_by(Quiz.id.asc()).all()


class QuizResultRepository(IQuizResultRepository):
    def __init__(self, db: Session):
        self.db = db

    def scores_for(self, user_id: int, quiz_ids: Iterable[int]) -> list[float]:
        quiz_ids = list(quiz_ids)
        if not quiz_ids:
            return []
        rows = (
            self.db.query(QuizResult.score)
            .filter(QuizResult.user_id == user_id, QuizResult.quiz_id.in_(quiz_ids))
            .all()
        )
        return [float(row.score) for row in rows]
