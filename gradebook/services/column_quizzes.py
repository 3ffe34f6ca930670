import logging
from typing import Iterable, Optional

from gradebook.core.exceptions import ConflictError, CrossCourseError, NotFoundError, ValidationError
from gradebook.models.grade_column import ColumnQuizAssignment, GradeColumn
from gradebook.ports.courses import ICourseRepository
from gradebook.ports.grade_columns import IAssignmentRepository, IGradeColumnRepository
from gradebook.ports.grade_results import IGradeResultRepository
from gradebook.ports.quizzes import IQuizRepository
from gradebook.ports.transaction import ITransactionScope

logger = logging.getLogger(__name__)


def _check_override(weight_override: Optional[float]) -> None:
    if weight_override is not None and (weight_override <= 0 or weight_override > 100):
        raise ValidationError("weight_percentage must be greater than 0 and at most 100")


class ColumnQuizService:
    """
    Which quizzes count towards which grade column.

    A quiz belongs to at most one column, and only to a column of its own
    course. Changing assignments never rewrites stored grade results; the
    course's results are flagged STALE instead and get recomputed on the
    next calculation.
    """

    def __init__(
        self,
        courses: ICourseRepository,
        columns: IGradeColumnRepository,
        assignments: IAssignmentRepository,
        quizzes: IQuizRepository,
        results: IGradeResultRepository,
        transaction: ITransactionScope,
    ):
        self.courses = courses
        self.columns = columns
        self.assignments = assignments
        self.quizzes = quizzes
        self.results = results
        self.transaction = transaction

    def _require_column(self, column_id: int, course_id: Optional[int] = None) -> GradeColumn:
        column = self.columns.get(column_id)
        if not column or (course_id is not None and column.course_id != course_id):
            raise NotFoundError(f"Grade column {column_id} not found")
        return column

    def assign_quiz(
        self,
        column_id: int,
        quiz_id: int,
        assigned_by: Optional[int] = None,
        weight_override: Optional[float] = None,
        course_id: Optional[int] = None,
    ) -> ColumnQuizAssignment:
        with self.transaction.scope():
            column = self._require_column(column_id, course_id)
            quiz = self.quizzes.get(quiz_id)
            if not quiz:
                raise NotFoundError(f"Quiz {quiz_id} not found")

            existing = self.assignments.find_by_quiz(quiz_id)
            if existing is not None:
                if existing.column_id == column.id:
                    return existing
                raise ConflictError(f"Quiz {quiz_id} is already assigned to grade column {existing.column_id}")

            if quiz.course_id != column.course_id:
                raise CrossCourseError(
                    f"Quiz {quiz_id} belongs to course {quiz.course_id}, "
                    f"grade column {column.id} belongs to course {column.course_id}"
                )
            if not column.is_active:
                raise ValidationError(f"Grade column {column.id} is deactivated")
            _check_override(weight_override)

            assignment = self.assignments.add(ColumnQuizAssignment(
                column_id=column.id,
                quiz_id=quiz_id,
                weight_percentage=weight_override,
                assigned_by=assigned_by,
            ))
            self.results.mark_stale(column.course_id)

        logger.info("Assigned quiz %s to grade column %s", quiz_id, column.id)
        return assignment

    def assign_quizzes(
        self,
        column_id: int,
        quiz_ids: Iterable[int],
        assigned_by: Optional[int] = None,
        replace: bool = False,
        course_id: Optional[int] = None,
        weight_overrides: Optional[dict] = None,
    ) -> list[ColumnQuizAssignment]:
        """
        Assign several quizzes at once, all or nothing.

        Quizzes already in the column keep their row; a weight override sent
        for one of them replaces the stored weight.
        """
        quiz_ids = list(dict.fromkeys(quiz_ids))
        if not quiz_ids:
            raise ValidationError("quiz_ids must not be empty")
        weight_overrides = weight_overrides or {}

        with self.transaction.scope():
            column = self._require_column(column_id, course_id)
            removed = 0
            if replace:
                for assignment in self.assignments.list_for_column(column.id):
                    if assignment.quiz_id not in quiz_ids:
                        self.assignments.delete(assignment)
                        removed += 1
                if removed:
                    self.results.mark_stale(column.course_id)

            assigned = []
            for quiz_id in quiz_ids:
                override = weight_overrides.get(quiz_id)
                existing = self.assignments.get(column.id, quiz_id)
                if existing is None:
                    assigned.append(self.assign_quiz(column.id, quiz_id, assigned_by, override))
                    continue
                _check_override(override)
                if override is not None and existing.weight_percentage != override:
                    existing.weight_percentage = override
                    self.assignments.save(existing)
                assigned.append(existing)

        if removed:
            logger.info("Replaced %d quiz assignments of grade column %s", removed, column.id)
        return assigned

    def unassign_quiz(self, column_id: int, quiz_id: int, course_id: Optional[int] = None) -> None:
        with self.transaction.scope():
            column = self._require_column(column_id, course_id)
            assignment = self.assignments.get(column.id, quiz_id)
            if not assignment:
                raise NotFoundError(f"Quiz {quiz_id} is not assigned to grade column {column.id}")
            self.assignments.delete(assignment)
            self.results.mark_stale(column.course_id)

        logger.info("Unassigned quiz %s from grade column %s", quiz_id, column_id)

    def unassign_all(self, column_id: int, course_id: Optional[int] = None) -> list[int]:
        with self.transaction.scope():
            column = self._require_column(column_id, course_id)
            removed = []
            for assignment in self.assignments.list_for_column(column.id):
                removed.append(assignment.quiz_id)
                self.assignments.delete(assignment)
            if removed:
                self.results.mark_stale(column.course_id)

        logger.info("Unassigned %d quizzes from grade column %s", len(removed), column_id)
        return removed

    def list_quizzes_for_column(self, column_id: int, course_id: Optional[int] = None) -> list[ColumnQuizAssignment]:
        column = self._require_column(column_id, course_id)
        return self.assignments.list_for_column(column.id)

    def available_quizzes(self, course_id: int) -> dict:
        if not self.courses.get(course_id):
            raise NotFoundError(f"Course {course_id} not found")

        column_by_quiz = {a.quiz_id: a.column_id for a in self.assignments.list_for_course(course_id)}
        available, assigned = [], []
        for quiz in self.quizzes.list_for_course(course_id):
            if quiz.id in column_by_quiz:
                assigned.append({"quiz": quiz, "column_id": column_by_quiz[quiz.id]})
            else:
                available.append(quiz)
        return {"available": available, "assigned": assigned}
