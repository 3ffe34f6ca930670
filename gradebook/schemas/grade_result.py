from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Dict, Any
from gradebook.models.grade_result import ResultStatus

class CalculateGradeRequest(BaseModel):
    user_id: int

class FinalExamScoreRequest(BaseModel):
    user_id: int
    final_exam_score: float

class MarkStaleRequest(BaseModel):
    user_id: Optional[int] = None

class GradeConfigSchema(BaseModel):
    process_weight: float = Field(..., ge=0, le=100)
    final_exam_weight: float = Field(..., ge=0, le=100)

    class Config:
        from_attributes = True

class StudentInfo(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True

class GradeResultResponse(BaseModel):
    id: int
    course_id: int
    user_id: int
    column_scores: Dict[str, Optional[float]]
    process_average: Optional[float] = None
    final_exam_score: Optional[float] = None
    total_score: Optional[float] = None
    grade: Optional[str] = None
    status: ResultStatus
    calculated_at: datetime
    last_updated: datetime

    class Config:
        from_attributes = True

class CourseGradeResultResponse(GradeResultResponse):
    student: StudentInfo

class GradeResultHistoryResponse(BaseModel):
    id: int
    result_id: int
    snapshot: Dict[str, Any]
    changed_at: datetime

    class Config:
        from_attributes = True
