from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


YearMonth = str  # "YYYY-MM"
YEAR_MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class RecordModel(BaseModel):
    """Immutable record model; serialized with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class PersonalInfo(RecordModel):
    name: Optional[str] = None
    role: Optional[str] = None  # Current job title
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None  # "City, Region"
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None

    def has_any(self) -> bool:
        return any(value for value in self.model_dump().values())


class Summary(RecordModel):
    content: str = Field(..., min_length=1, description="Professional summary, at most 500 characters")


class Experience(RecordModel):
    company: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    location: Optional[str] = None
    start_date: Optional[YearMonth] = Field(default=None, pattern=YEAR_MONTH_PATTERN)
    end_date: Optional[YearMonth] = Field(default=None, pattern=YEAR_MONTH_PATTERN)
    is_current: bool = False
    description: str = ""
    order: int = Field(..., ge=0, description="0-based position in the experience section")

    @model_validator(mode="after")
    def current_has_no_end_date(self) -> "Experience":
        if self.is_current and self.end_date is not None:
            raise ValueError("a current position cannot have an end date")
        return self


class Education(RecordModel):
    institution: str = Field(..., min_length=1)  # University, College, Institute name
    degree: str = Field(..., min_length=1)  # Bachelor of Science, Master's, PhD
    field: Optional[str] = None  # Computer Science, Engineering, etc.
    location: Optional[str] = None
    graduation_date: Optional[YearMonth] = Field(default=None, pattern=YEAR_MONTH_PATTERN)
    description: Optional[str] = None  # GPA, honors, coursework
    order: int = Field(..., ge=0)


class Skill(RecordModel):
    name: str = Field(..., min_length=1)
    category: str = "General"
    order: int = Field(..., ge=0)


class ParsedResumeRecord(RecordModel):
    personal_info: Optional[PersonalInfo] = None
    summary: Optional[Summary] = None
    experiences: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0, description="Overall extraction confidence (0.0-1.0)")


class ParseResponse(ParsedResumeRecord):
    file_name: str
    file_size: int = Field(..., ge=0, description="Upload size in bytes")
