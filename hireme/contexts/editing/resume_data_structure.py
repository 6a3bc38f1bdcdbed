"""
Resume Data Structures

Defines the aggregate resume record edited by the user: personal info plus
ordered experience, education and skill lists, and the target job description
used as analysis input.

Every record is a frozen dataclass and every list is a tuple, so an edit always
produces a new aggregate and two aggregates compare equal field-for-field.

Persisted form uses the camelCase keys of the stored JSON document
(personalInfo, fullName, startDate, targetJobDescription, ...).
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Tuple

from hireme.contexts.editing.logger import _log_debug, _log_warning


class SkillLevel(str, Enum):
    """Closed set of proficiency levels a skill can carry."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    EXPERT = "Expert"


DEFAULT_SKILL_LEVEL = SkillLevel.INTERMEDIATE


@dataclass(frozen=True)
class PersonalInfo:
    """
    Contact details and summary shown at the top of every template.

    All fields are free-form strings. linkedin, portfolio and summary are
    optional and are left out of the layout when empty.
    """

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    portfolio: str = ""
    summary: str = ""


@dataclass(frozen=True)
class Experience:
    """
    One work experience entry.

    Attributes:
        id: Identifier unique within the experience list
        role: Job title
        company: Employer
        start_date: Free-form start date
        end_date: Free-form end date, kept as entered even while current is set
        current: Still employed here; end date renders as "Present"
        description: Free-text description or bullets
    """

    id: str
    role: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""


@dataclass(frozen=True)
class Education:
    """One education entry. year is free-form and not checked as a number."""

    id: str
    degree: str = ""
    school: str = ""
    year: str = ""


@dataclass(frozen=True)
class Skill:
    """One skill. level is stored but no template displays it."""

    id: str
    name: str = ""
    level: SkillLevel = DEFAULT_SKILL_LEVEL


@dataclass(frozen=True)
class ResumeData:
    """
    Aggregate root holding every user-entered field.

    List order is display order. The aggregate is replaced as a whole on every
    edit and persisted as one JSON document.
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    experience: Tuple[Experience, ...] = ()
    education: Tuple[Education, ...] = ()
    skills: Tuple[Skill, ...] = ()
    target_job_description: str = ""

    @classmethod
    def empty(cls) -> "ResumeData":
        """All-empty defaults used for a new session."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted camelCase document."""
        return {
            "personalInfo": _record_to_dict(self.personal_info),
            "experience": [_record_to_dict(item) for item in self.experience],
            "education": [_record_to_dict(item) for item in self.education],
            "skills": [_record_to_dict(item) for item in self.skills],
            "targetJobDescription": self.target_job_description,
        }

    @classmethod
    def from_dict(cls, document: Dict[str, Any]) -> "ResumeData":
        """
        Restore an aggregate from its persisted document.

        Missing keys take their defaults so that older or partial snapshots
        still load. Values are coerced to the field types (strings, bool, skill
        level); an unknown skill level becomes Intermediate and a non-boolean
        `current` becomes False.

        Args:
            document: Parsed JSON document

        Returns:
            ResumeData instance

        Raises:
            ValueError: If document is not a mapping or a list field is not a list
        """
        if not isinstance(document, dict):
            raise ValueError(f"Resume document must be an object, got {type(document).__name__}")

        personal = document.get("personalInfo") or {}
        if not isinstance(personal, dict):
            raise ValueError("'personalInfo' must be an object")

        return cls(
            personal_info=_record_from_dict(PersonalInfo, personal),
            experience=tuple(
                _record_from_dict(Experience, item)
                for item in _list_field(document, "experience")
            ),
            education=tuple(
                _record_from_dict(Education, item)
                for item in _list_field(document, "education")
            ),
            skills=tuple(
                _record_from_dict(Skill, item) for item in _list_field(document, "skills")
            ),
            target_job_description=_as_str(document.get("targetJobDescription", "")),
        )


# Field name mapping between snake_case attributes and camelCase JSON keys


def to_camel(name: str) -> str:
    """full_name -> fullName"""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _record_to_dict(record) -> Dict[str, Any]:
    result = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if isinstance(value, SkillLevel):
            value = value.value
        result[to_camel(f.name)] = value
    return result


def _record_from_dict(record_cls, raw: Any):
    if not isinstance(raw, dict):
        raise ValueError(f"{record_cls.__name__} entry must be an object, got {raw!r}")

    kwargs = {}
    for f in fields(record_cls):
        key = to_camel(f.name)
        if key not in raw:
            _log_debug(f"{record_cls.__name__}: missing '{key}', using default")
            if f.name == "id":
                kwargs["id"] = ""
            continue

        value = raw[key]
        if f.name == "current":
            if isinstance(value, bool):
                kwargs[f.name] = value
            else:
                _log_warning(f"{record_cls.__name__}: '{key}' is not a boolean ({value!r}), using default")
        elif f.name == "level":
            kwargs[f.name] = parse_skill_level(value)
        else:
            kwargs[f.name] = _as_str(value)

    return record_cls(**kwargs)


def _list_field(document: Dict[str, Any], key: str) -> list:
    value = document.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list")
    return value


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


def parse_skill_level(value: Any) -> SkillLevel:
    """
    Coerce a stored or user-supplied level to SkillLevel.

    Unknown values fall back to the default level with a warning.
    """
    if isinstance(value, SkillLevel):
        return value
    try:
        return SkillLevel(str(value))
    except ValueError:
        _log_warning(f"Unknown skill level {value!r}, using {DEFAULT_SKILL_LEVEL.value}")
        return DEFAULT_SKILL_LEVEL
