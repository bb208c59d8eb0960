from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Dict, List, Literal


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CourseRecord(CamelModel):
    id: str = ""
    name: str
    credits: float
    grade: str
    semester: str = ""
    is_transfer: bool = False
    original_credits: Optional[float] = None
    credit_system: Optional[str] = None  # "semester" | "quarter" | "trimester"
    course_type: str = "core"  # "core" | "elective" | "honors" | "ap"
    institution_name: Optional[str] = None
    rigor_rating: Optional[float] = None


class GradingScale(CamelModel):
    name: str
    type: Optional[str] = None
    grades: Dict[str, float]


class InstitutionalSettings(CamelModel):
    include_transfer_in_gpa: bool = Field(default=True, alias="includeTransferInGPA")
    separate_transfer_gpa: bool = Field(default=True, alias="separateTransferGPA")
    core_subjects_only: bool = False
    honors_bonus_points: float = 0.5
    ap_bonus_points: float = 1.0
    rigor_adjustment: float = 1.0


class CourseDetail(CourseRecord):
    converted_credits: float
    adjusted_grade_points: float
    quality_points: float


class Breakdown(CamelModel):
    total_credits: float = 0.0
    institutional_credits: float = 0.0
    transfer_credits: float = 0.0
    quality_points: float = 0.0
    institutional_quality_points: float = 0.0
    transfer_quality_points: float = 0.0


class CalculationResult(CamelModel):
    institutional: Optional[float] = None
    transfer: Optional[float] = None
    cumulative: Optional[float] = None
    breakdown: Breakdown = Field(default_factory=Breakdown)
    course_details: List[CourseDetail] = []
    warnings: List[str] = []


# ── API request / response bodies ────────────────────────────────────────────

class SimpleGPARequest(CamelModel):
    courses: List[CourseRecord]
    grading_scale: GradingScale
    student_name: Optional[str] = None


class SimpleGPAResponse(CamelModel):
    gpa: Optional[float]
    total_credits: float
    total_quality_points: float
    course_details: List[CourseDetail]
    validation_issues: List[str] = []


class TransferGPARequest(CamelModel):
    courses: List[CourseRecord]
    grading_scale: GradingScale
    institutional_settings: Optional[InstitutionalSettings] = None
    student_name: Optional[str] = None
    save_to_history: bool = False
    include_insights: bool = False


class TransferGPAResponse(CamelModel):
    results: CalculationResult
    validation_issues: List[str] = []
    insights: List[str] = []
    history_id: Optional[str] = None


class BatchOptions(CamelModel):
    grading_scale: Optional[GradingScale] = None
    grading_scale_name: Optional[str] = None
    institutional_settings: Optional[InstitutionalSettings] = None


class BatchGPAResponse(CamelModel):
    student_count: int
    results: Dict[str, CalculationResult]
    validation_issues: List[str] = []


class InstitutionData(CamelModel):
    name: str
    grading_scale: str
    rigor: float
    original_cgpa: Optional[float] = Field(default=None, alias="originalCGPA")


class TranscriptCourse(CamelModel):
    id: str = ""
    name: str
    credits: float
    grade: str
    semester: str = ""


class TranscriptGPARequest(CamelModel):
    courses: List[TranscriptCourse]
    institution_data: InstitutionData
    student_name: Optional[str] = None


class CourseConversion(CamelModel):
    course: str
    original_grade: str
    converted_grade: float
    quality_points: float


class TranscriptConversion(CamelModel):
    converted_gpa: float = Field(alias="convertedGPA")
    rigor_adjusted_gpa: float = Field(alias="rigorAdjustedGPA")
    rigor_multiplier: float
    course_conversions: List[CourseConversion]
    conversion_methodology: str
    conversion_notes: str
    original_cgpa: Optional[float] = Field(default=None, alias="originalCGPA")
    institution_rigor: float
    total_courses: int
    total_credits: float


class Institution(CamelModel):
    id: str
    name: str
    country: str
    rigor: float
    type: str
    grading_system: str
    conversion_factor: float
    recognition_level: Literal["High", "Medium", "Standard"]
    specializations: List[str] = []


class HistoryEntry(CamelModel):
    id: str
    created_at: str
    student_name: Optional[str] = None
    grading_scale: str
    results: CalculationResult


class ExportRequest(CamelModel):
    results: CalculationResult
    student_name: Optional[str] = None
    grading_scale: Optional[str] = None
