from models.course import CourseCategory, CourseDefinition
from models.offering import (
    CourseOffering,
    ExamOption,
    ExamType,
    LectureSession,
    SemesterType,
)
from models.program_rule import (
    CategoryRequirement,
    MastersProgramRule,
    RequirementRow,
    RuleEvaluationResult,
)
from models.plan import SelectedOffering, UserPlan
from models.planner_data import PlannerData, PlannerDataError, ReferenceReport

__all__ = [
    "CourseCategory",
    "CourseDefinition",
    "CourseOffering",
    "ExamOption",
    "ExamType",
    "LectureSession",
    "SemesterType",
    "CategoryRequirement",
    "MastersProgramRule",
    "RequirementRow",
    "RuleEvaluationResult",
    "SelectedOffering",
    "UserPlan",
    "PlannerData",
    "PlannerDataError",
    "ReferenceReport",
]
