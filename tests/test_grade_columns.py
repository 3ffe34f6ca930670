import pytest

from gradebook.core.exceptions import ConflictError, NotFoundError, ValidationError
from gradebook.models.grade_column import ColumnStatus
from gradebook.models.grade_result import ResultStatus


class TestCreateColumn:
    def test_create_assigns_next_order(self, make, column_service):
        course = make.course()
        first = column_service.create_column(course.id, "Homework", 30)
        second = column_service.create_column(course.id, "Midterm", 30, description="Written exam")

        assert first.column_order == 1
        assert second.column_order == 2
        assert second.status == ColumnStatus.ACTIVE
        assert second.description == "Written exam"

    def test_total_weight_cannot_exceed_100(self, make, column_service):
        course = make.course()
        column_service.create_column(course.id, "Homework", 50)
        column_service.create_column(course.id, "Midterm", 30)

        with pytest.raises(ValidationError):
            column_service.create_column(course.id, "Project", 30)

        column_service.create_column(course.id, "Project", 20)
        assert column_service.column_summary(course.id).total_weight == 100.0

    def test_fractional_weights_that_add_up_to_100(self, make, column_service):
        course = make.course()
        for name in ("A", "B"):
            column_service.create_column(course.id, name, 33.33)
        column_service.create_column(course.id, "C", 33.34)

        summary = column_service.column_summary(course.id)
        assert summary.total_weight == 100.0
        assert summary.is_weight_complete

    @pytest.mark.parametrize("weight", [0, -5, 100.5, "heavy"])
    def test_rejects_bad_weight(self, make, column_service, weight):
        course = make.course()
        with pytest.raises(ValidationError):
            column_service.create_column(course.id, "Homework", weight)

    @pytest.mark.parametrize("name", [None, "", "   ", "x" * 256])
    def test_rejects_bad_name(self, make, column_service, name):
        course = make.course()
        with pytest.raises(ValidationError):
            column_service.create_column(course.id, name, 10)

    def test_order_must_be_unique_and_positive(self, make, column_service):
        course = make.course()
        column_service.create_column(course.id, "Homework", 10, order=3)

        with pytest.raises(ValidationError):
            column_service.create_column(course.id, "Midterm", 10, order=3)
        with pytest.raises(ValidationError):
            column_service.create_column(course.id, "Midterm", 10, order=0)

    def test_unknown_course(self, column_service):
        with pytest.raises(NotFoundError):
            column_service.create_column(999, "Homework", 10)

    def test_same_order_allowed_in_other_course(self, make, column_service):
        first, second = make.course("Algorithms"), make.course("Databases")
        column_service.create_column(first.id, "Homework", 10, order=1)
        column = column_service.create_column(second.id, "Homework", 10, order=1)
        assert column.column_order == 1


def test_list_columns_is_ordered(make, column_service):
    course = make.course()
    column_service.create_column(course.id, "Final lab", 40, order=5)
    column_service.create_column(course.id, "Homework", 20, order=1)
    column_service.create_column(course.id, "Midterm", 40, order=3)

    names = [c.column_name for c in column_service.list_columns(course.id)]
    assert names == ["Homework", "Midterm", "Final lab"]


class TestUpdateColumn:
    def test_weight_check_excludes_the_column_itself(self, make, column_service):
        course = make.course()
        homework = column_service.create_column(course.id, "Homework", 60)
        column_service.create_column(course.id, "Midterm", 40)

        updated = column_service.update_column(homework.id, weight_percentage=60)
        assert updated.weight_percentage == 60

        with pytest.raises(ValidationError):
            column_service.update_column(homework.id, weight_percentage=61)

    def test_partial_update_keeps_other_fields(self, make, column_service):
        course = make.course()
        column = column_service.create_column(course.id, "Homework", 20, description="Weekly")

        updated = column_service.update_column(column.id, course_id=course.id, name="Assignments")
        assert updated.column_name == "Assignments"
        assert updated.weight_percentage == 20
        assert updated.description == "Weekly"

    def test_order_clash_on_update(self, make, column_service):
        course = make.course()
        column_service.create_column(course.id, "Homework", 20, order=1)
        midterm = column_service.create_column(course.id, "Midterm", 20, order=2)

        with pytest.raises(ValidationError):
            column_service.update_column(midterm.id, order=1)
        assert column_service.update_column(midterm.id, order=2).column_order == 2

    def test_column_of_other_course_is_not_found(self, make, column_service):
        first, second = make.course("Algorithms"), make.course("Databases")
        column = column_service.create_column(first.id, "Homework", 20)

        with pytest.raises(NotFoundError):
            column_service.update_column(column.id, course_id=second.id, name="Stolen")


class TestDeactivateColumn:
    def test_deactivated_weight_is_released(self, make, column_service):
        course = make.course()
        homework = column_service.create_column(course.id, "Homework", 60)
        column_service.create_column(course.id, "Midterm", 40)

        column_service.deactivate_column(homework.id)

        assert column_service.column_summary(course.id).total_weight == 40.0
        column_service.create_column(course.id, "Project", 60)

    def test_hidden_from_default_listing(self, make, column_service):
        course = make.course()
        homework = column_service.create_column(course.id, "Homework", 60)
        column_service.deactivate_column(homework.id)

        assert column_service.list_columns(course.id) == []
        inactive = column_service.list_columns(course.id, include_inactive=True)
        assert [c.id for c in inactive] == [homework.id]
        assert not inactive[0].is_active

    def test_deactivating_twice_is_harmless(self, make, column_service):
        course = make.course()
        column = column_service.create_column(course.id, "Homework", 60)
        column_service.deactivate_column(column.id)
        assert column_service.deactivate_column(column.id).status == ColumnStatus.DEACTIVATED


class TestDeleteColumn:
    def test_delete_empty_column(self, make, column_service):
        course = make.course()
        column = column_service.create_column(course.id, "Homework", 60)
        column_service.delete_column(column.id, course_id=course.id)

        with pytest.raises(NotFoundError):
            column_service.get_column(column.id)

    def test_refuses_while_quizzes_assigned(self, make, column_service, quiz_service):
        course = make.course()
        column = column_service.create_column(course.id, "Homework", 60)
        quiz_service.assign_quiz(column.id, make.quiz(course).id)

        with pytest.raises(ConflictError):
            column_service.delete_column(column.id)

        quiz_service.unassign_all(column.id)
        column_service.delete_column(column.id)
        assert column_service.list_columns(course.id, include_inactive=True) == []


def test_column_changes_flag_results_stale(graded_course, column_service, result_service):
    course, alice = graded_course["course"], graded_course["alice"]
    result = result_service.calculate_and_save_result(course.id, alice.id)
    assert result.status == ResultStatus.COMPUTED

    column_service.update_column(graded_course["lab"].id, description="Lab sessions")

    assert result_service.get_result(course.id, alice.id).status == ResultStatus.STALE
