"""
Grade column / column-quiz assignment repository ports
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from gradebook.models.grade_column import ColumnQuizAssignment, GradeColumn


class IGradeColumnRepository(ABC):
    @abstractmethod
    def get(self, column_id: int) -> Optional[GradeColumn]:
        pass

    @abstractmethod
    def list_for_course(self, course_id: int, include_inactive: bool = False) -> list[GradeColumn]:
        """Columns ordered by column_order"""
        pass

    @abstractmethod
    def active_weights(self, course_id: int, exclude_column_id: Optional[int] = None) -> list[float]:
        pass

    @abstractmethod
    def max_order(self, course_id: int) -> int:
        """Highest column_order used in the course, 0 when it has no columns"""
        pass

    @abstractmethod
    def order_taken(self, course_id: int, order: int, exclude_column_id: Optional[int] = None) -> bool:
        pass

    @abstractmethod
    def add(self, column: GradeColumn) -> GradeColumn:
        pass

    @abstractmethod
    def delete(self, column: GradeColumn) -> None:
        pass


class IAssignmentRepository(ABC):
    @abstractmethod
    def get(self, column_id: int, quiz_id: int) -> Optional[ColumnQuizAssignment]:
        pass

    @abstractmethod
    def find_by_quiz(self, quiz_id: int) -> Optional[ColumnQuizAssignment]:
        pass

    @abstractmethod
    def list_for_column(self, column_id: int) -> list[ColumnQuizAssignment]:
        """Assignments ordered by assignment time"""
        pass

    @abstractmethod
    def list_for_course(self, course_id: int) -> list[ColumnQuizAssignment]:
        pass

    @abstractmethod
    def quiz_ids_for_column(self, column_id: int) -> list[int]:
        pass

    @abstractmethod
    def add(self, assignment: ColumnQuizAssignment) -> ColumnQuizAssignment:
        pass

    @abstractmethod
    def delete(self, assignment: ColumnQuizAssignment) -> None:
        pass

    @abstractmethod
    def save(self, assignment: ColumnQuizAssignment) -> ColumnQuizAssignment:
        pass
