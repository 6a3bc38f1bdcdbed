"""
Editing Context

Responsibilities:
- Owns the resume data model (personal info, experience, education, skills, job description)
- Holds the single ResumeData aggregate and persists it on every change
- Provides section editors (pure update functions and store-bound editor objects)
- Reports advisory format issues without rejecting free-form input

Owns: ResumeData, persistence, per-section updates
Never: Decides layout or talks to the hosted model directly
"""

from hireme.contexts.editing.resume_data_structure import (
    Education,
    Experience,
    PersonalInfo,
    ResumeData,
    Skill,
    SkillLevel,
)
from hireme.contexts.editing.section_editors import (
    EducationEditor,
    ExperienceEditor,
    JobDescriptionEditor,
    LoadingTracker,
    PersonalInfoEditor,
    SkillsEditor,
    add_item,
    remove_item,
    set_personal_field,
    update_item,
)
from hireme.contexts.editing.storage import JsonFileStorage
from hireme.contexts.editing.store import LoadResult, PersistResult, ResumeStore
from hireme.contexts.editing.validation import ValidationIssue, validate_resume

__all__ = [
    # Data model
    "PersonalInfo",
    "Experience",
    "Education",
    "Skill",
    "SkillLevel",
    "ResumeData",
    # Persistence
    "JsonFileStorage",
    "ResumeStore",
    "LoadResult",
    "PersistResult",
    # Editors
    "PersonalInfoEditor",
    "ExperienceEditor",
    "EducationEditor",
    "SkillsEditor",
    "JobDescriptionEditor",
    "LoadingTracker",
    "add_item",
    "remove_item",
    "update_item",
    "set_personal_field",
    # Validation
    "ValidationIssue",
    "validate_resume",
]
