"""
Grade result repository port

One GradeResult row per (course, student). Every overwrite of an existing
row is preceded by a history snapshot.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from gradebook.models.grade_result import GradeResult, GradeResultHistory


class IGradeResultRepository(ABC):
    @abstractmethod
    def get(self, course_id: int, user_id: int) -> Optional[GradeResult]:
        pass

    @abstractmethod
    def list_for_course(self, course_id: int) -> list[GradeResult]:
        """Results of the course ordered by student name"""
        pass

    @abstractmethod
    def add(self, result: GradeResult) -> GradeResult:
        pass

    @abstractmethod
    def save(self, result: GradeResult) -> GradeResult:
        pass

    @abstractmethod
    def add_history(self, result: GradeResult, snapshot: dict) -> GradeResultHistory:
        pass

    @abstractmethod
    def history(self, result_id: int) -> list[GradeResultHistory]:
        pass

    @abstractmethod
    def mark_stale(self, course_id: int, user_id: Optional[int] = None) -> int:
        """Flag COMPUTED results as STALE, returns the number of rows flagged"""
        pass
