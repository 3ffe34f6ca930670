"""
Course / student repository ports

Read access to courses, their enrolled students and the course grade config.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from gradebook.models.course import Course
from gradebook.models.user import User


class ICourseRepository(ABC):
    @abstractmethod
    def get(self, course_id: int) -> Optional[Course]:
        pass

    @abstractmethod
    def list_students(self, course_id: int) -> list[User]:
        """Students enrolled in the course, ordered by name"""
        pass

    @abstractmethod
    def set_grade_config(self, course: Course, config: dict) -> Course:
        pass


class IUserRepository(ABC):
    @abstractmethod
    def get(self, user_id: int) -> Optional[User]:
        pass
