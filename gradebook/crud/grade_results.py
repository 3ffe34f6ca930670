from typing import Optional

from sqlalchemy.orm import Session

from gradebook.models.grade_result import GradeResult, GradeResultHistory, ResultStatus
from gradebook.models.user import User
from gradebook.ports.grade_results import IGradeResultRepository


class GradeResultRepository(IGradeResultRepository):
    def __init__(self, db: Session):
        self.db = db

    def get(self, course_id: int, user_id: int) -> Optional[GradeResult]:
        return self.db.query(GradeResult).filter(
            GradeResult.course_id == course_id,
            GradeResult.user_id == user_id
        ).first()

    def list_for_course(self, course_id: int) -> list[GradeResult]:
        return (
            self.db.query(GradeResult)
            .join(User, User.id == GradeResult.user_id)
            .filter(GradeResult.course_id == course_id)
            .order_by(User.name.asc(), User.id.asc())
            .all()
        )

    def add(self, result: GradeResult) -> GradeResult:
        self.db.add(result)
        self.db.flush()
        return result

    def save(self, result: GradeResult) -> GradeResult:
        self.db.flush()
        return result

    def add_history(self, result: GradeResult, snapshot: dict) -> GradeResultHistory:
        entry = GradeResultHistory(result_id=result.id, snapshot=snapshot)
        self.db.add(entry)
        self.db.flush()
        return entry

    def history(self, result_id: int) -> list[GradeResultHistory]:
        return (
            self.db.query(GradeResultHistory)
            .filter(GradeResultHistory.result_id == result_id)
            .order_by(GradeResultHistory.id.asc())
            .all()
        )

    def mark_stale(self, course_id: int, user_id: Optional[int] = None) -> int:
        query = self.db.query(GradeResult).filter(
            GradeResult.course_id == course_id,
            GradeResult.status == ResultStatus.COMPUTED
        )
        if user_id is not None:
            query = query.filter(GradeResult.user_id == user_id)
        flagged = query.update({GradeResult.status: ResultStatus.STALE}, synchronize_session="fetch")
        self.db.flush()
        return flagged
