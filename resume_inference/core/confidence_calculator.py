"""
Overall confidence for a parsed resume.

Points are awarded per record area and summed out of 100:

  Personal info   35   name 15, email 12, role 8, phone 3, location 3 (capped at 35)
  Summary         10   full credit above 50 characters, half credit below
  Experience      25   5 + 4 per entry
  Education       10   5 per entry
  Skills          20   5 + 1.5 per skill

Each area is capped at its maximum, so the score is always in [0.0, 1.0]. A
record with nothing in it scores 0.0.
"""

from typing import Dict, Optional, Sequence

from resume_inference.core.schemas import (
    Education,
    Experience,
    ParsedResumeRecord,
    PersonalInfo,
    Skill,
    Summary,
)


PERSONAL_INFO_MAX = 35.0
SUMMARY_MAX = 10.0
EXPERIENCE_MAX = 25.0
EDUCATION_MAX = 10.0
SKILLS_MAX = 20.0

PERSONAL_FIELD_POINTS = {
    "name": 15.0,
    "email": 12.0,
    "role": 8.0,
    "phone": 3.0,
    "location": 3.0,
}

SUMMARY_FULL_CREDIT_CHARS = 50


class ConfidenceCalculator:
    """Central place for record confidence logic."""

    @staticmethod
    def personal_info(info: Optional[PersonalInfo]) -> float:
        if info is None:
            return 0.0
        points = sum(p for name, p in PERSONAL_FIELD_POINTS.items() if getattr(info, name))
        return min(PERSONAL_INFO_MAX, points)

    @staticmethod
    def summary(summary: Optional[Summary]) -> float:
        if summary is None or not summary.content.strip():
            return 0.0
        if len(summary.content) > SUMMARY_FULL_CREDIT_CHARS:
            return SUMMARY_MAX
        return SUMMARY_MAX / 2

    @staticmethod
    def experience(experiences: Sequence[Experience]) -> float:
        if not experiences:
            return 0.0
        return min(EXPERIENCE_MAX, 5 + 4 * len(experiences))

    @staticmethod
    def education(education: Sequence[Education]) -> float:
        return min(EDUCATION_MAX, 5 * len(education))

    @staticmethod
    def skills(skills: Sequence[Skill]) -> float:
        if not skills:
            return 0.0
        return min(SKILLS_MAX, 5 + 1.5 * len(skills))

    @staticmethod
    def breakdown(
        personal_info: Optional[PersonalInfo] = None,
        summary: Optional[Summary] = None,
        experiences: Sequence[Experience] = (),
        education: Sequence[Education] = (),
        skills: Sequence[Skill] = (),
    ) -> Dict[str, float]:
        """Achieved points per area."""
        return {
            "personal_info": ConfidenceCalculator.personal_info(personal_info),
            "summary": ConfidenceCalculator.summary(summary),
            "experience": ConfidenceCalculator.experience(experiences),
            "education": ConfidenceCalculator.education(education),
            "skills": ConfidenceCalculator.skills(skills),
        }

    @staticmethod
    def overall(**parts) -> float:
        """
        Overall confidence in [0.0, 1.0], rounded to two decimals.

        Takes the same keyword arguments as `breakdown`.
        """
        achieved = sum(ConfidenceCalculator.breakdown(**parts).values())
        return round(max(0.0, min(1.0, achieved / 100.0)), 2)

    @staticmethod
    def for_record(record: ParsedResumeRecord) -> float:
        return ConfidenceCalculator.overall(
            personal_info=record.personal_info,
            summary=record.summary,
            experiences=record.experiences,
            education=record.education,
            skills=record.skills,
        )
