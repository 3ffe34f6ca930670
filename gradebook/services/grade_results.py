"""
Grade result aggregation

Turns a student's quiz results into a course grade:

    column average  -> mean of the student's results on the column's quizzes
    process average -> sum(column average * column weight / 100), null columns skipped
    total score     -> process average and final exam blended by the course grade config
    grade           -> letter from GRADE_BOUNDARIES

Lifecycle of a result row: absent (uncomputed) -> COMPUTED -> STALE -> COMPUTED.
Rows go STALE when assignments, columns, the grade config, the final exam
score or (through mark_stale) the underlying quiz results change.
"""
import logging
from numbers import Real
from typing import Optional

from gradebook.core.config.settings import get_settings
from gradebook.core.exceptions import NotFoundError, ValidationError
from gradebook.models.grade_result import GradeResult, GradeResultHistory, ResultStatus
from gradebook.ports.courses import ICourseRepository, IUserRepository
from gradebook.ports.grade_columns import IGradeColumnRepository
from gradebook.ports.grade_results import IGradeResultRepository
from gradebook.ports.transaction import ITransactionScope
from gradebook.services.column_average import ColumnAverager
from gradebook.services.grading import GradeConfig, grade_for_total, process_average, total_score
from gradebook.utils.helpers import format_datetime, get_utc_now, round_score

logger = logging.getLogger(__name__)


def snapshot_of(result: GradeResult) -> dict:
    """JSON-safe copy of a result row, stored before the row is overwritten"""
    return {
        "column_scores": dict(result.column_scores or {}),
        "process_average": result.process_average,
        "final_exam_score": result.final_exam_score,
        "total_score": result.total_score,
        "grade": result.grade,
        "status": result.status.value if result.status else None,
        "calculated_at": format_datetime(result.calculated_at),
        "last_updated": format_datetime(result.last_updated),
    }


class GradeResultService:
    def __init__(
        self,
        courses: ICourseRepository,
        users: IUserRepository,
        columns: IGradeColumnRepository,
        results: IGradeResultRepository,
        averager: ColumnAverager,
        transaction: ITransactionScope,
    ):
        self.courses = courses
        self.users = users
        self.columns = columns
        self.results = results
        self.averager = averager
        self.transaction = transaction

    def _require_course(self, course_id: int):
        course = self.courses.get(course_id)
        if not course:
            raise NotFoundError(f"Course {course_id} not found")
        return course

    def calculate_and_save_result(self, course_id: int, student_id: int) -> GradeResult:
        with self.transaction.scope():
            course = self._require_course(course_id)
            if not self.users.get(student_id):
                raise NotFoundError(f"Student {student_id} not found")

            config = GradeConfig.from_json(course.grade_config)
            columns = self.columns.list_for_course(course_id)
            if not columns:
                raise ValidationError(f"Course {course_id} has no grade columns")

            column_scores = {}
            weighted = []
            for column in columns:
                average = self.averager.average_for_student(column.id, student_id)
                column_scores[str(column.id)] = average
                weighted.append((average, column.weight_percentage))

            process_avg = process_average(weighted)
            result = self.results.get(course_id, student_id)
            # The final exam is entered separately and survives recomputation
            final_exam = result.final_exam_score if result is not None else None
            total = total_score(process_avg, final_exam, config)
            now = get_utc_now()

            if result is None:
                result = self.results.add(GradeResult(
                    course_id=course_id,
                    user_id=student_id,
                    column_scores=column_scores,
                    process_average=process_avg,
                    final_exam_score=None,
                    total_score=total,
                    grade=grade_for_total(total),
                    status=ResultStatus.COMPUTED,
                    calculated_at=now,
                    last_updated=now,
                ))
            else:
                self.results.add_history(result, snapshot_of(result))
                result.column_scores = column_scores
                result.process_average = process_avg
                result.total_score = total
                result.grade = grade_for_total(total)
                result.status = ResultStatus.COMPUTED
                result.calculated_at = now
                result.last_updated = now
                self.results.save(result)

        logger.info(
            "Computed grade for student %s in course %s: process=%s total=%s grade=%s",
            student_id, course_id, result.process_average, result.total_score, result.grade,
        )
        return result

    def update_final_exam_score(self, course_id: int, student_id: int, score: float) -> GradeResult:
        max_score = get_settings().MAX_SCORE
        if isinstance(score, bool) or not isinstance(score, Real):
            raise ValidationError("final_exam_score must be a number")
        if score < 0 or score > max_score:
            raise ValidationError(f"final_exam_score must be between 0 and {max_score:g}")

        with self.transaction.scope():
            course = self._require_course(course_id)
            result = self.results.get(course_id, student_id)
            if result is None:
                raise NotFoundError(
                    f"No grade result for student {student_id} in course {course_id}; calculate it first"
                )

            self.results.add_history(result, snapshot_of(result))
            config = GradeConfig.from_json(course.grade_config)
            result.final_exam_score = round_score(score)
            result.total_score = total_score(result.process_average, result.final_exam_score, config)
            result.grade = grade_for_total(result.total_score)
            # Process average was not re-derived, so the row waits for the next calculation
            result.status = ResultStatus.STALE
            result.last_updated = get_utc_now()
            self.results.save(result)

        logger.info("Final exam score %s recorded for student %s in course %s", score, student_id, course_id)
        return result

    def recalculate_all(self, course_id: int) -> list[tuple]:
        """Recompute every enrolled student, returns (student, result) pairs ordered by name"""
        self._require_course(course_id)
        if not self.columns.list_for_course(course_id):
            raise ValidationError(f"Course {course_id} has no grade columns")

        recalculated = []
        for student in self.courses.list_students(course_id):
            recalculated.append((student, self.calculate_and_save_result(course_id, student.id)))

        logger.info("Recalculated %d grade results in course %s", len(recalculated), course_id)
        return recalculated

    def get_course_results(self, course_id: int) -> list[GradeResult]:
        self._require_course(course_id)
        return self.results.list_for_course(course_id)

    def get_result(self, course_id: int, student_id: int) -> GradeResult:
        result = self.results.get(course_id, student_id)
        if result is None:
            raise NotFoundError(f"No grade result for student {student_id} in course {course_id}")
        return result

    def get_result_history(self, course_id: int, student_id: int) -> list[GradeResultHistory]:
        return self.results.history(self.get_result(course_id, student_id).id)

    def mark_stale(self, course_id: int, student_id: Optional[int] = None) -> int:
        with self.transaction.scope():
            self._require_course(course_id)
            flagged = self.results.mark_stale(course_id, student_id)

        logger.info("Flagged %d grade results stale in course %s", flagged, course_id)
        return flagged
