"""Custom exceptions for the editing context."""

from typing import Iterable, Optional

from hireme.utils.errors import HireMeError


class UnknownFieldError(HireMeError, KeyError):
    """
    Raised when an editor is asked to set a field the record does not have.

    Attributes:
        record_name: Record type being edited (e.g., 'Experience')
        field_name: Field that was requested
        valid_fields: Fields the record does have
    """

    def __init__(self, record_name: str, field_name: str, valid_fields: Iterable[str]):
        self.record_name = record_name
        self.field_name = field_name
        self.valid_fields = sorted(valid_fields)
        self.message = (
            f"{record_name} has no field '{field_name}'. "
            f"Valid fields: {', '.join(self.valid_fields)}"
        )
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class ItemNotFoundError(HireMeError, LookupError):
    """Raised when a list editor is given an identifier that is not in the list."""

    def __init__(self, list_name: str, item_id: str):
        self.list_name = list_name
        self.item_id = item_id
        super().__init__(f"No {list_name} item with id '{item_id}'")


class StorageError(HireMeError):
    """
    Raised by storage backends when the durable file cannot be read or written.

    Attributes:
        message: Error description
        path: Storage file involved
        original_error: The underlying OS or decode error
    """

    def __init__(self, message: str, path=None, original_error: Optional[Exception] = None):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path is not None:
            parts.append(f"Storage file: {path}")
        if original_error is not None:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
