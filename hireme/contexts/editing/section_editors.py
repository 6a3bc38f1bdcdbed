"""
Section Editors

Each editor is a projection/update pair over one slice of ResumeData. The pure
functions at the top of this module take an aggregate and return a new one;
the editor classes bind them to a ResumeStore so every change is persisted and
broadcast.

Two editors also call the analysis client on demand (summary generation and
bullet improvement). While such a request is in flight a loading key is held
in a shared LoadingTracker ("summary", "exp-<id>"), so the rest of the editor
stays usable and only the triggering control is blocked.
"""

from contextlib import contextmanager
from dataclasses import fields, replace
from typing import Any, Dict, Iterator, Optional, Set, Tuple

from hireme.contexts.editing.exceptions import ItemNotFoundError, UnknownFieldError
from hireme.contexts.editing.logger import _log_debug, _log_warning, log_item_change
from hireme.contexts.editing.resume_data_structure import (
    Education,
    Experience,
    PersonalInfo,
    ResumeData,
    Skill,
    SkillLevel,
)
from hireme.contexts.editing.store import ResumeStore
from hireme.utils.timestamp import new_item_id

# List name -> record type
LIST_RECORDS = {
    "experience": Experience,
    "education": Education,
    "skills": Skill,
}

SUMMARY_LOADING_KEY = "summary"


def experience_loading_key(item_id: str) -> str:
    return f"exp-{item_id}"


# =============================================================================
# PURE UPDATE FUNCTIONS
# =============================================================================


def _editable_fields(record_cls) -> Set[str]:
    return {f.name for f in fields(record_cls)} - {"id"}


def _coerce_value(record_name: str, field_name: str, value: Any) -> Any:
    """Check value against the field's type at the editing boundary."""
    if field_name == "current":
        if not isinstance(value, bool):
            raise TypeError(f"{record_name}.current must be a bool, got {value!r}")
        return value
    if field_name == "level":
        # Raises ValueError for anything outside Beginner/Intermediate/Expert
        return SkillLevel(value)
    if not isinstance(value, str):
        raise TypeError(f"{record_name}.{field_name} must be a string, got {value!r}")
    return value


def set_personal_field(data: ResumeData, field_name: str, value: str) -> ResumeData:
    """
    Copy the aggregate with one personal-info field replaced.

    Raises:
        UnknownFieldError: If field_name is not a PersonalInfo field
    """
    valid = _editable_fields(PersonalInfo)
    if field_name not in valid:
        raise UnknownFieldError("PersonalInfo", field_name, valid)

    value = _coerce_value("PersonalInfo", field_name, value)
    return replace(data, personal_info=replace(data.personal_info, **{field_name: value}))


def set_job_description(data: ResumeData, text: str) -> ResumeData:
    """Copy the aggregate with a new target job description."""
    if not isinstance(text, str):
        raise TypeError(f"Job description must be a string, got {text!r}")
    return replace(data, target_job_description=text)


def _record_cls(list_name: str):
    if list_name not in LIST_RECORDS:
        raise ValueError(
            f"Unknown list '{list_name}'. Valid lists: {', '.join(sorted(LIST_RECORDS))}"
        )
    return LIST_RECORDS[list_name]


def add_item(
    data: ResumeData, list_name: str, item_id: Optional[str] = None
) -> Tuple[ResumeData, str]:
    """
    Append a new item with default field values to one of the lists.

    Args:
        data: Current aggregate
        list_name: "experience", "education" or "skills"
        item_id: Identifier to use (default: fresh timestamp-derived id)

    Returns:
        Tuple of (new aggregate, identifier of the added item)
    """
    record_cls = _record_cls(list_name)
    items = getattr(data, list_name)

    if item_id is None:
        item_id = new_item_id(item.id for item in items)
    elif any(item.id == item_id for item in items):
        raise ValueError(f"{list_name} already has an item with id '{item_id}'")

    new_item = record_cls(id=item_id)
    return replace(data, **{list_name: items + (new_item,)}), item_id


def remove_item(data: ResumeData, list_name: str, item_id: str) -> ResumeData:
    """
    Filter the item with item_id out of a list.

    Raises:
        ItemNotFoundError: If no item has item_id
    """
    _record_cls(list_name)
    items = getattr(data, list_name)
    remaining = tuple(item for item in items if item.id != item_id)
    if len(remaining) == len(items):
        raise ItemNotFoundError(list_name, item_id)
    return replace(data, **{list_name: remaining})


def update_item(
    data: ResumeData, list_name: str, item_id: str, field_name: str, value: Any
) -> ResumeData:
    """
    Replace one field on the matching item, leaving other items and order untouched.

    Args:
        data: Current aggregate
        list_name: "experience", "education" or "skills"
        item_id: Identifier of the item to change
        field_name: Field to replace (any field except id)
        value: New value; bool for Experience.current, a level name for Skill.level

    Returns:
        New aggregate

    Raises:
        UnknownFieldError: If field_name is not editable on the record
        ItemNotFoundError: If no item has item_id
        TypeError/ValueError: If value does not fit the field
    """
    record_cls = _record_cls(list_name)
    valid = _editable_fields(record_cls)
    if field_name not in valid:
        raise UnknownFieldError(record_cls.__name__, field_name, valid)

    value = _coerce_value(record_cls.__name__, field_name, value)
    items = getattr(data, list_name)

    if not any(item.id == item_id for item in items):
        raise ItemNotFoundError(list_name, item_id)

    updated = tuple(
        replace(item, **{field_name: value}) if item.id == item_id else item for item in items
    )
    return replace(data, **{list_name: updated})


def find_item(data: ResumeData, list_name: str, item_id: str):
    """Return the item with item_id, raising ItemNotFoundError if absent."""
    _record_cls(list_name)
    for item in getattr(data, list_name):
        if item.id == item_id:
            return item
    raise ItemNotFoundError(list_name, item_id)


# =============================================================================
# LOADING STATE
# =============================================================================


class LoadingTracker:
    """Set of operation keys whose AI request is still in flight."""

    def __init__(self):
        self._active: Set[str] = set()

    def is_loading(self, key: str) -> bool:
        return key in self._active

    @property
    def active(self) -> Set[str]:
        return set(self._active)

    @contextmanager
    def track(self, key: str) -> Iterator[None]:
        """Hold key for the duration of the block, releasing it even on failure or cancellation."""
        self._active.add(key)
        try:
            yield
        finally:
            self._active.discard(key)


# =============================================================================
# STORE-BOUND EDITORS
# =============================================================================


class PersonalInfoEditor:
    """Field-level setters for personal info plus AI summary generation."""

    def __init__(self, store: ResumeStore, client=None, loading: LoadingTracker = None):
        self.store = store
        self.client = client
        self.loading = loading or LoadingTracker()

    @property
    def info(self) -> PersonalInfo:
        return self.store.data.personal_info

    def set(self, field_name: str, value: str) -> None:
        self.store.set(set_personal_field(self.store.data, field_name, value))

    def set_many(self, values: Dict[str, str]) -> None:
        """Set several fields in a single replacement."""
        data = self.store.data
        for field_name, value in values.items():
            data = set_personal_field(data, field_name, value)
        self.store.set(data)

    @property
    def summary_loading(self) -> bool:
        return self.loading.is_loading(SUMMARY_LOADING_KEY)

    async def generate_summary(self) -> Optional[str]:
        """
        Ask the analysis client for a summary and write it into personal info.

        Inert (returns None) while a summary request is already in flight.
        The client never raises for request failures; its fallback text is
        written back like any other result.
        """
        if self.client is None:
            raise RuntimeError("PersonalInfoEditor has no analysis client")
        if self.summary_loading:
            _log_debug("Summary generation already in flight")
            return None

        with self.loading.track(SUMMARY_LOADING_KEY):
            summary = await self.client.generate_summary(self.store.data)

        self.store.update(lambda data: set_personal_field(data, "summary", summary))
        return summary


class ListEditor:
    """add/remove/update over one of the aggregate's ordered lists."""

    list_name: str

    def __init__(self, store: ResumeStore):
        self.store = store

    @property
    def items(self) -> tuple:
        return getattr(self.store.data, self.list_name)

    def get(self, item_id: str):
        return find_item(self.store.data, self.list_name, item_id)

    def add(self) -> str:
        """Append a new default item and return its identifier."""
        data, item_id = add_item(self.store.data, self.list_name)
        self.store.set(data)
        log_item_change("Added", self.list_name, item_id)
        return item_id

    def remove(self, item_id: str) -> None:
        self.store.set(remove_item(self.store.data, self.list_name, item_id))
        log_item_change("Removed", self.list_name, item_id)

    def update(self, item_id: str, field_name: str, value: Any) -> None:
        self.store.set(update_item(self.store.data, self.list_name, item_id, field_name, value))

    def update_many(self, item_id: str, values: Dict[str, Any]) -> None:
        """Set several fields on one item in a single replacement."""
        data = self.store.data
        find_item(data, self.list_name, item_id)
        for field_name, value in values.items():
            data = update_item(data, self.list_name, item_id, field_name, value)
        self.store.set(data)


class ExperienceEditor(ListEditor):
    """Experience list editor with AI bullet improvement."""

    list_name = "experience"

    def __init__(self, store: ResumeStore, client=None, loading: LoadingTracker = None):
        super().__init__(store)
        self.client = client
        self.loading = loading or LoadingTracker()

    def is_improving(self, item_id: str) -> bool:
        return self.loading.is_loading(experience_loading_key(item_id))

    def can_improve(self, item_id: str) -> bool:
        """Improvement needs a non-empty description and no request in flight for this item."""
        item = self.get(item_id)
        return bool(item.description) and not self.is_improving(item_id)

    async def improve_description(self, item_id: str) -> Optional[str]:
        """
        Rewrite one experience description with the analysis client.

        The description and role are read when the request starts; the result
        is written into whatever snapshot is current when it returns. If the
        item was removed meanwhile the result is dropped.

        Returns:
            Improved text, or None if the trigger was inert
        """
        if self.client is None:
            raise RuntimeError("ExperienceEditor has no analysis client")
        if not self.can_improve(item_id):
            _log_debug(f"Improve inert for experience {item_id}")
            return None

        item = self.get(item_id)
        with self.loading.track(experience_loading_key(item_id)):
            improved = await self.client.improve_description(item.description, item.role)

        try:
            self.store.update(
                lambda data: update_item(data, "experience", item_id, "description", improved)
            )
        except ItemNotFoundError:
            _log_warning(f"Experience {item_id} was removed before its improvement returned")
        return improved


class EducationEditor(ListEditor):
    list_name = "education"


class SkillsEditor(ListEditor):
    list_name = "skills"


class JobDescriptionEditor:
    """Free-text target job description used as analysis input."""

    def __init__(self, store: ResumeStore):
        self.store = store

    @property
    def text(self) -> str:
        return self.store.data.target_job_description

    def set(self, text: str) -> None:
        self.store.set(set_job_description(self.store.data, text))
