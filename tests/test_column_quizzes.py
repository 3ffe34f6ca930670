import pytest

from gradebook.core.exceptions import ConflictError, CrossCourseError, NotFoundError, ValidationError
from gradebook.models.grade_result import ResultStatus


@pytest.fixture
def course_with_column(make, column_service):
    course = make.course()
    column = column_service.create_column(course.id, "Homework", 50)
    return course, column


class TestAssignQuiz:
    def test_assign(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        quiz = make.quiz(course)
        instructor = make.student("Prof. Oak")

        assignment = quiz_service.assign_quiz(column.id, quiz.id, assigned_by=instructor.id)

        assert assignment.column_id == column.id
        assert assignment.quiz_id == quiz.id
        assert assignment.assigned_by == instructor.id
        assert assignment.assigned_at is not None

    def test_quiz_from_other_course_is_rejected(self, make, quiz_service, course_with_column):
        _, column = course_with_column
        other_course = make.course("Databases")
        foreign_quiz = make.quiz(other_course)

        with pytest.raises(CrossCourseError):
            quiz_service.assign_quiz(column.id, foreign_quiz.id)
        assert quiz_service.list_quizzes_for_column(column.id) == []

    def test_cross_course_is_a_validation_error(self, make, quiz_service, course_with_column):
        _, column = course_with_column
        foreign_quiz = make.quiz(make.course("Databases"))
        with pytest.raises(ValidationError):
            quiz_service.assign_quiz(column.id, foreign_quiz.id)

    def test_quiz_belongs_to_one_column_only(self, make, column_service, quiz_service, course_with_column):
        course, column = course_with_column
        other_column = column_service.create_column(course.id, "Midterm", 50)
        quiz = make.quiz(course)
        quiz_service.assign_quiz(column.id, quiz.id)

        with pytest.raises(ConflictError):
            quiz_service.assign_quiz(other_column.id, quiz.id)

    def test_reassigning_to_same_column_is_idempotent(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        quiz = make.quiz(course)
        first = quiz_service.assign_quiz(column.id, quiz.id)
        second = quiz_service.assign_quiz(column.id, quiz.id)

        assert first.id == second.id
        assert len(quiz_service.list_quizzes_for_column(column.id)) == 1

    def test_unknown_quiz_or_column(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        with pytest.raises(NotFoundError):
            quiz_service.assign_quiz(column.id, 999)
        with pytest.raises(NotFoundError):
            quiz_service.assign_quiz(999, make.quiz(course).id)

    def test_deactivated_column_takes_no_quizzes(self, make, column_service, quiz_service, course_with_column):
        course, column = course_with_column
        column_service.deactivate_column(column.id)
        with pytest.raises(ValidationError):
            quiz_service.assign_quiz(column.id, make.quiz(course).id)

    def test_flags_results_stale(self, graded_course, quiz_service, result_service, make):
        course, alice = graded_course["course"], graded_course["alice"]
        result_service.calculate_and_save_result(course.id, alice.id)

        quiz_service.assign_quiz(graded_course["lab"].id, make.quiz(course).id)

        assert result_service.get_result(course.id, alice.id).status == ResultStatus.STALE


class TestAssignQuizzes:
    def test_bulk_assign_keeps_order(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        quizzes = [make.quiz(course) for _ in range(3)]

        quiz_service.assign_quizzes(column.id, [q.id for q in quizzes])

        listed = quiz_service.list_quizzes_for_column(column.id)
        assert [a.quiz_id for a in listed] == [q.id for q in quizzes]

    def test_all_or_nothing(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        good = make.quiz(course)
        foreign = make.quiz(make.course("Databases"))

        with pytest.raises(CrossCourseError):
            quiz_service.assign_quizzes(column.id, [good.id, foreign.id])
        assert quiz_service.list_quizzes_for_column(column.id) == []

    def test_replace_drops_unlisted_quizzes(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        q1, q2, q3 = make.quiz(course), make.quiz(course), make.quiz(course)
        quiz_service.assign_quizzes(column.id, [q1.id, q2.id])

        quiz_service.assign_quizzes(column.id, [q2.id, q3.id], replace=True)

        assert sorted(a.quiz_id for a in quiz_service.list_quizzes_for_column(column.id)) == [q2.id, q3.id]

    def test_weight_overrides_are_stored(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        quiz = make.quiz(course)
        [assignment] = quiz_service.assign_quizzes(column.id, [quiz.id], weight_overrides={quiz.id: 25})
        assert assignment.weight_percentage == 25

    def test_empty_list_is_rejected(self, quiz_service, course_with_column):
        _, column = course_with_column
        with pytest.raises(ValidationError):
            quiz_service.assign_quizzes(column.id, [])

    def test_replace_that_only_removes_flags_results_stale(self, graded_course, quiz_service, result_service):
        course_id, alice_id = graded_course["course"].id, graded_course["alice"].id
        midterm = graded_course["midterm"]
        _, q2, _ = graded_course["quizzes"]
        result_service.calculate_and_save_result(course_id, alice_id)

        quiz_service.assign_quizzes(midterm.id, [q2.id], replace=True)

        assert [a.quiz_id for a in quiz_service.list_quizzes_for_column(midterm.id)] == [q2.id]
        assert result_service.get_result(course_id, alice_id).status == ResultStatus.STALE
        # Midterm now only counts q2 (9.0)
        recomputed = result_service.calculate_and_save_result(course_id, alice_id)
        assert recomputed.column_scores[str(midterm.id)] == 9.0

    def test_replace_with_same_quizzes_keeps_results_computed(self, graded_course, quiz_service, result_service):
        course_id, alice_id = graded_course["course"].id, graded_course["alice"].id
        q1, q2, _ = graded_course["quizzes"]
        result_service.calculate_and_save_result(course_id, alice_id)

        quiz_service.assign_quizzes(graded_course["midterm"].id, [q1.id, q2.id], replace=True)

        assert result_service.get_result(course_id, alice_id).status == ResultStatus.COMPUTED

    def test_new_weight_for_already_assigned_quiz_is_stored(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        quiz = make.quiz(course)
        original = quiz_service.assign_quiz(column.id, quiz.id)

        [updated] = quiz_service.assign_quizzes(column.id, [quiz.id], weight_overrides={quiz.id: 40})

        assert updated.id == original.id
        assert updated.weight_percentage == 40
        assert quiz_service.list_quizzes_for_column(column.id)[0].weight_percentage == 40

    def test_bad_weight_for_already_assigned_quiz(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        quiz = make.quiz(course)
        quiz_service.assign_quiz(column.id, quiz.id, weight_override=30)

        with pytest.raises(ValidationError):
            quiz_service.assign_quizzes(column.id, [quiz.id], weight_overrides={quiz.id: 150})
        assert quiz_service.list_quizzes_for_column(column.id)[0].weight_percentage == 30

    def test_single_assign_stays_idempotent_with_new_weight(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        quiz = make.quiz(course)
        quiz_service.assign_quiz(column.id, quiz.id, weight_override=30)

        again = quiz_service.assign_quiz(column.id, quiz.id, weight_override=60)

        assert again.weight_percentage == 30


class TestUnassign:
    def test_unassign_quiz(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        q1, q2 = make.quiz(course), make.quiz(course)
        quiz_service.assign_quizzes(column.id, [q1.id, q2.id])

        quiz_service.unassign_quiz(column.id, q1.id)

        assert [a.quiz_id for a in quiz_service.list_quizzes_for_column(column.id)] == [q2.id]

    def test_unassign_missing_assignment(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        with pytest.raises(NotFoundError):
            quiz_service.unassign_quiz(column.id, make.quiz(course).id)

    def test_unassigned_quiz_can_move_to_other_column(self, make, column_service, quiz_service, course_with_column):
        course, column = course_with_column
        other = column_service.create_column(course.id, "Midterm", 50)
        quiz = make.quiz(course)
        quiz_service.assign_quiz(column.id, quiz.id)
        quiz_service.unassign_quiz(column.id, quiz.id)

        assert quiz_service.assign_quiz(other.id, quiz.id).column_id == other.id

    def test_unassign_all(self, make, quiz_service, course_with_column):
        course, column = course_with_column
        quizzes = [make.quiz(course) for _ in range(2)]
        quiz_service.assign_quizzes(column.id, [q.id for q in quizzes])

        removed = quiz_service.unassign_all(column.id)

        assert sorted(removed) == sorted(q.id for q in quizzes)
        assert quiz_service.list_quizzes_for_column(column.id) == []
        assert quiz_service.unassign_all(column.id) == []


def test_available_quizzes(make, column_service, quiz_service, course_with_column):
    course, column = course_with_column
    assigned, free = make.quiz(course, "Week 1"), make.quiz(course, "Week 2")
    make.quiz(make.course("Databases"), "Elsewhere")
    quiz_service.assign_quiz(column.id, assigned.id)

    quizzes = quiz_service.available_quizzes(course.id)

    assert [q.id for q in quizzes["available"]] == [free.id]
    assert [(item["quiz"].id, item["column_id"]) for item in quizzes["assigned"]] == [(assigned.id, column.id)]


def test_available_quizzes_unknown_course(quiz_service):
    with pytest.raises(NotFoundError):
        quiz_service.available_quizzes(999)
