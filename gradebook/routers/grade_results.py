from fastapi import APIRouter, Depends, Response

from gradebook.dependencies.services import get_grade_result_service, get_result_exporter
from gradebook.schemas.grade_result import (
    CalculateGradeRequest,
    CourseGradeResultResponse,
    FinalExamScoreRequest,
    GradeResultHistoryResponse,
    GradeResultResponse,
    MarkStaleRequest,
    StudentInfo,
)
from gradebook.services.export import ExportFile, ResultExporter
from gradebook.services.grade_results import GradeResultService

router = APIRouter(prefix="/courses/{course_id}/grade-results", tags=["grade-results"])

@router.post("/calculate")
async def calculate_student_grade(
    course_id: int,
    payload: CalculateGradeRequest,
    service: GradeResultService = Depends(get_grade_result_service)
):
    result = service.calculate_and_save_result(course_id, payload.user_id)
    return {
        "message": "Grade calculated successfully",
        "grade_result": GradeResultResponse.model_validate(result)
    }

@router.post("/recalculate-all")
async def recalculate_all_grades(
    course_id: int,
    service: GradeResultService = Depends(get_grade_result_service)
):
    recalculated = service.recalculate_all(course_id)
    return {
        "message": f"Recalculated grades for {len(recalculated)} students",
        "course_id": course_id,
        "updated_students": len(recalculated),
        "results": [
            {
                "student": StudentInfo.model_validate(student),
                "grade_result": GradeResultResponse.model_validate(result)
            }
            for student, result in recalculated
        ]
    }

@router.put("/final-exam-score")
async def update_final_exam_score(
    course_id: int,
    payload: FinalExamScoreRequest,
    service: GradeResultService = Depends(get_grade_result_service)
):
    result = service.update_final_exam_score(course_id, payload.user_id, payload.final_exam_score)
    return {
        "message": "Final exam score updated successfully",
        "grade_result": GradeResultResponse.model_validate(result)
    }

@router.post("/mark-stale")
async def mark_results_stale(
    course_id: int,
    payload: MarkStaleRequest,
    service: GradeResultService = Depends(get_grade_result_service)
):
    flagged = service.mark_stale(course_id, payload.user_id)
    return {"message": "Grade results marked stale", "flagged": flagged}

@router.get("")
async def get_course_grade_results(
    course_id: int,
    service: GradeResultService = Depends(get_grade_result_service)
):
    results = service.get_course_results(course_id)
    return [CourseGradeResultResponse.model_validate(r) for r in results]

@router.get("/export")
async def export_course_results(
    course_id: int,
    format: str = "json",
    exporter: ResultExporter = Depends(get_result_exporter)
):
    exported = exporter.export_course_results(course_id, format)
    if isinstance(exported, ExportFile):
        return Response(
            content=exported.content,
            media_type=exported.media_type,
            headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'}
        )
    return exported

@router.get("/{student_id}")
async def get_student_grade_result(
    course_id: int,
    student_id: int,
    service: GradeResultService = Depends(get_grade_result_service)
):
    return GradeResultResponse.model_validate(service.get_result(course_id, student_id))

@router.get("/{student_id}/history")
async def get_student_grade_history(
    course_id: int,
    student_id: int,
    service: GradeResultService = Depends(get_grade_result_service)
):
    history = service.get_result_history(course_id, student_id)
    return [GradeResultHistoryResponse.model_validate(h) for h in history]
