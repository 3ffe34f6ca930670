from fastapi import APIRouter, Depends

from gradebook.dependencies.services import get_column_quiz_service, get_grade_config_service
from gradebook.schemas.grade_column import QuizSummary
from gradebook.schemas.grade_result import GradeConfigSchema
from gradebook.services.column_quizzes import ColumnQuizService
from gradebook.services.grade_config import GradeConfigService

router = APIRouter(prefix="/courses/{course_id}", tags=["courses"])

@router.get("/available-quizzes")
async def get_available_quizzes(
    course_id: int,
    service: ColumnQuizService = Depends(get_column_quiz_service)
):
    quizzes = service.available_quizzes(course_id)
    return {
        "available_quizzes": [QuizSummary.model_validate(q) for q in quizzes["available"]],
        "assigned_quizzes": [
            {**QuizSummary.model_validate(item["quiz"]).model_dump(), "assigned_to_column": item["column_id"]}
            for item in quizzes["assigned"]
        ],
        "total_quizzes": len(quizzes["available"]) + len(quizzes["assigned"])
    }

@router.get("/grade-config")
async def get_grade_config(
    course_id: int,
    service: GradeConfigService = Depends(get_grade_config_service)
):
    return GradeConfigSchema.model_validate(service.get_grade_config(course_id))

@router.put("/grade-config")
async def update_grade_config(
    course_id: int,
    payload: GradeConfigSchema,
    service: GradeConfigService = Depends(get_grade_config_service)
):
    config = service.update_grade_config(course_id, payload.process_weight, payload.final_exam_weight)
    return {
        "message": "Grade config updated successfully",
        "grade_config": GradeConfigSchema.model_validate(config)
    }
