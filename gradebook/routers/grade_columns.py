from fastapi import APIRouter, Depends, status

from gradebook.dependencies.services import get_column_quiz_service, get_grade_column_service
from gradebook.schemas.grade_column import (
    GradeColumnCreate,
    GradeColumnResponse,
    GradeColumnSummary,
    GradeColumnUpdate,
    QuizAssignmentRequest,
    QuizAssignmentResponse,
)
from gradebook.services.column_quizzes import ColumnQuizService
from gradebook.services.grade_columns import GradeColumnService

router = APIRouter(prefix="/courses/{course_id}/grade-columns", tags=["grade-columns"])

@router.get("")
async def get_grade_columns(
    course_id: int,
    include_inactive: bool = False,
    service: GradeColumnService = Depends(get_grade_column_service)
):
    summary = service.column_summary(course_id, include_inactive=include_inactive)
    return GradeColumnSummary.model_validate(summary)

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_grade_column(
    course_id: int,
    payload: GradeColumnCreate,
    service: GradeColumnService = Depends(get_grade_column_service)
):
    column = service.create_column(
        course_id,
        payload.column_name,
        payload.weight_percentage,
        order=payload.column_order,
        description=payload.description,
    )
    return {
        "message": "Grade column created successfully",
        "column": GradeColumnResponse.model_validate(column)
    }

@router.put("/{column_id}")
async def update_grade_column(
    course_id: int,
    column_id: int,
    payload: GradeColumnUpdate,
    service: GradeColumnService = Depends(get_grade_column_service)
):
    changes = payload.model_dump(exclude_unset=True)
    column = service.update_column(
        column_id,
        course_id=course_id,
        **{
            field: changes[key]
            for key, field in (
                ("column_name", "name"),
                ("weight_percentage", "weight_percentage"),
                ("column_order", "order"),
                ("description", "description"),
            )
            if key in changes
        }
    )
    return {
        "message": "Grade column updated successfully",
        "column": GradeColumnResponse.model_validate(column)
    }

@router.post("/{column_id}/deactivate")
async def deactivate_grade_column(
    course_id: int,
    column_id: int,
    service: GradeColumnService = Depends(get_grade_column_service)
):
    column = service.deactivate_column(column_id, course_id=course_id)
    return {
        "message": "Grade column deactivated",
        "column": GradeColumnResponse.model_validate(column)
    }

@router.delete("/{column_id}")
async def delete_grade_column(
    course_id: int,
    column_id: int,
    service: GradeColumnService = Depends(get_grade_column_service)
):
    service.delete_column(column_id, course_id=course_id)
    return {"message": "Grade column deleted successfully", "column_id": column_id}

@router.get("/{column_id}/quizzes")
async def get_column_quizzes(
    course_id: int,
    column_id: int,
    service: ColumnQuizService = Depends(get_column_quiz_service)
):
    assignments = service.list_quizzes_for_column(column_id, course_id=course_id)
    return [QuizAssignmentResponse.model_validate(a) for a in assignments]

@router.post("/{column_id}/quizzes")
async def assign_quizzes_to_column(
    course_id: int,
    column_id: int,
    payload: QuizAssignmentRequest,
    service: ColumnQuizService = Depends(get_column_quiz_service)
):
    assignments = service.assign_quizzes(
        column_id,
        [item.quiz_id for item in payload.quiz_assignments],
        assigned_by=payload.assigned_by,
        replace=payload.replace,
        course_id=course_id,
        weight_overrides={
            item.quiz_id: item.weight_percentage
            for item in payload.quiz_assignments
            if item.weight_percentage is not None
        },
    )
    return {
        "message": "Quizzes assigned successfully",
        "column_id": column_id,
        "assignments": [QuizAssignmentResponse.model_validate(a) for a in assignments]
    }

@router.delete("/{column_id}/quizzes/{quiz_id}")
async def unassign_quiz_from_column(
    course_id: int,
    column_id: int,
    quiz_id: int,
    service: ColumnQuizService = Depends(get_column_quiz_service)
):
    service.unassign_quiz(column_id, quiz_id, course_id=course_id)
    return {"message": "Quiz unassigned successfully", "column_id": column_id, "quiz_id": quiz_id}

@router.delete("/{column_id}/quizzes")
async def unassign_all_quizzes_from_column(
    course_id: int,
    column_id: int,
    service: ColumnQuizService = Depends(get_column_quiz_service)
):
    removed = service.unassign_all(column_id, course_id=course_id)
    return {
        "message": "All quizzes unassigned successfully",
        "column_id": column_id,
        "unassigned_quizzes": len(removed),
        "quiz_ids": removed
    }
