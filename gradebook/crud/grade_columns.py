from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from gradebook.models.grade_column import ColumnQuizAssignment, ColumnStatus, GradeColumn
from gradebook.ports.grade_columns import IAssignmentRepository, IGradeColumnRepository


class GradeColumnRepository(IGradeColumnRepository):
    def __init__(self, db: Session):
        self.db = db

    def get(self, column_id: int) -> Optional[GradeColumn]:
        return self.db.query(GradeColumn).filter(GradeColumn.id == column_id).first()

    def list_for_course(self, course_id: int, include_inactive: bool = False) -> list[GradeColumn]:
        query = self.db.query(GradeColumn).filter(GradeColumn.course_id == course_id)
        if not include_inactive:
            query = query.filter(GradeColumn.status == ColumnStatus.ACTIVE)
        return query.order_by(GradeColumn.column_order.asc()).all()

    def active_weights(self, course_id: int, exclude_column_id: Optional[int] = None) -> list[float]:
        query = self.db.query(GradeColumn.weight_percentage).filter(
            GradeColumn.course_id == course_id,
            GradeColumn.status == ColumnStatus.ACTIVE,
        )
        if exclude_column_id is not None:
            query = query.filter(GradeColumn.id != exclude_column_id)
        return [float(row.weight_percentage) for row in query.all()]

    def max_order(self, course_id: int) -> int:
        max_order = (
            self.db.query(func.max(GradeColumn.column_order))
            .filter(GradeColumn.course_id == course_id)
            .scalar()
        )
        return max_order or 0

    def order_taken(self, course_id: int, order: int, exclude_column_id: Optional[int] = None) -> bool:
        query = self.db.query(GradeColumn.id).filter(
            GradeColumn.course_id == course_id,
            GradeColumn.column_order == order,
        )
        if exclude_column_id is not None:
            query = query.filter(GradeColumn.id != exclude_column_id)
        return query.first() is not None

    def add(self, column: GradeColumn) -> GradeColumn:
        self.db.add(column)
        self.db.flush()
        return column

    def delete(self, column: GradeColumn) -> None:
        self.db.delete(column)
        self.db.flush()


class AssignmentRepository(IAssignmentRepository):
    def __init__(self, db: Session):
        self.db = db

    def get(self, column_id: int, quiz_id: int) -> Optional[ColumnQuizAssignment]:
        return self.db.query(ColumnQuizAssignment).filter(
            ColumnQuizAssignment.column_id == column_id,
            ColumnQuizAssignment.quiz_id == quiz_id
        ).first()

    def find_by_quiz(self, quiz_id: int) -> Optional[ColumnQuizAssignment]:
        return self.db.query(ColumnQuizAssignment).filter(ColumnQuizAssignment.quiz_id == quiz_id).first()

    def list_for_column(self, column_id: int) -> list[ColumnQuizAssignment]:
        return (
            self.db.query(ColumnQuizAssignment)
            .filter(ColumnQuizAssignment.column_id == column_id)
            .order_by(ColumnQuizAssignment.assigned_at.asc(), ColumnQuizAssignment.id.asc())
            .all()
        )

    def list_for_course(self, course_id: int) -> list[ColumnQuizAssignment]:
        return (
            self.db.query(ColumnQuizAssignment)
            .join(GradeColumn, GradeColumn.id == ColumnQuizAssignment.column_id)
            .filter(GradeColumn.course_id == course_id)
            .all()
        )

    def quiz_ids_for_column(self, column_id: int) -> list[int]:
        rows = self.db.query(ColumnQuizAssignment.quiz_id).filter(
            ColumnQuizAssignment.column_id == column_id
        ).all()
        return [row.quiz_id for row in rows]

    def add(self, assignment: ColumnQuizAssignment) -> ColumnQuizAssignment:
        self.db.add(assignment)
        self.db.flush()
        return assignment

    def delete(self, assignment: ColumnQuizAssignment) -> None:
        self.db.delete(assignment)
        self.db.flush()

    def save(self, assignment: ColumnQuizAssignment) -> ColumnQuizAssignment:
        self.db.flush()
        return assignment
