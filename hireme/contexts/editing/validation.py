"""
Advisory checks for free-form resume fields.

Fields stay free-form: nothing here rejects or rewrites input. The checks only
report values that look unlike what the field usually holds, so the shell can
point them out before export.
"""

import re
from dataclasses import dataclass
from typing import List

from hireme.contexts.editing.resume_data_structure import ResumeData

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
URL_PATTERN = re.compile(r"^(https?://)?([\w-]+\.)+[\w-]{2,}(/\S*)?$", re.IGNORECASE)
YEAR_PATTERN = re.compile(r"\b(19|20)\d{2}\b")


@dataclass(frozen=True)
class ValidationIssue:
    """
    One advisory finding.

    Attributes:
        location: Where the value lives (e.g., "personalInfo.email", "education[2].year")
        message: What looks off
    """

    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


def validate_resume(data: ResumeData) -> List[ValidationIssue]:
    """
    Report advisory issues with email, URL and year fields, plus entries that
    would render as blank lines (no name, no role/company, no skill name).

    Empty optional fields (email, phone, links, year) are never reported.

    Args:
        data: Aggregate to check

    Returns:
        List of issues, in field order (empty if nothing looks off)
    """
    issues = []
    info = data.personal_info

    if info.email and not EMAIL_PATTERN.match(info.email.strip()):
        issues.append(ValidationIssue("personalInfo.email", "does not look like an email address"))

    for field_name, value in (("linkedin", info.linkedin), ("portfolio", info.portfolio)):
        if value and not URL_PATTERN.match(value.strip()):
            issues.append(ValidationIssue(f"personalInfo.{field_name}", "does not look like a URL"))

    if not info.full_name.strip():
        issues.append(ValidationIssue("personalInfo.fullName", "name is empty"))

    for index, exp in enumerate(data.experience):
        if not exp.role.strip() and not exp.company.strip():
            issues.append(ValidationIssue(f"experience[{index}]", "has neither role nor company"))

    for index, edu in enumerate(data.education):
        if edu.year and not YEAR_PATTERN.search(edu.year):
            issues.append(ValidationIssue(f"education[{index}].year", "contains no four-digit year"))

    for index, skill in enumerate(data.skills):
        if not skill.name.strip():
            issues.append(ValidationIssue(f"skills[{index}].name", "skill name is empty"))

    return issues
