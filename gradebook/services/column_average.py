from typing import Optional

from gradebook.ports.grade_columns import IAssignmentRepository
from gradebook.ports.quizzes import IQuizResultRepository
from gradebook.utils.helpers import round_score


class ColumnAverager:
    def __init__(self, assignments: IAssignmentRepository, quiz_results: IQuizResultRepository):
        self.assignments = assignments
        self.quiz_results = quiz_results

    def average_for_student(self, column_id: int, student_id: int) -> Optional[float]:
        """
        Plain mean of the student's results on the quizzes assigned to the column.

        Every result row counts once; per-quiz weight overrides are not applied.
        Returns None when the student has no result on any of those quizzes,
        which keeps the column out of the process average instead of counting
        it as zero.
        """
        quiz_ids = self.assignments.quiz_ids_for_column(column_id)
        if not quiz_ids:
            return None
        scores = self.quiz_results.scores_for(student_id, quiz_ids)
        if not scores:
            return None
        return round_score(sum(scores) / len(scores))
