"""
Quiz / quiz result repository ports

Quiz results are owned by the quiz-taking side of the platform.
Grading only ever reads them.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from gradebook.models.quiz import Quiz


class IQuizRepository(ABC):
    @abstractmethod
    def get(self, quiz_id: int) -> Optional[Quiz]:
        pass

    @abstractmethod
    def list_for_course(self, course_id: int) -> list[Quiz]:
        pass


class IQuizResultRepository(ABC):
    @abstractmethod
    def scores_for(self, user_id: int, quiz_ids: Iterable[int]) -> list[float]:
        """Scores of every result row the user has for the given quizzes"""
        pass
