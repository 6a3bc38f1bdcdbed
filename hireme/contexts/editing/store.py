"""
Resume Data Store

State container for the single ResumeData aggregate. Holds the current
snapshot, replaces it wholesale on every edit, mirrors each change to durable
storage, and notifies subscribers (editors, renderer, shell).

Lifecycle is explicit: ResumeStore.restore() to initialise from storage,
close() to flush and tear down.
"""

import json
from dataclasses import dataclass
from typing import Callable, List, Optional

from hireme.contexts.editing.exceptions import StorageError
from hireme.contexts.editing.logger import _log_debug, _log_error, log_restore_result
from hireme.contexts.editing.resume_data_structure import ResumeData
from hireme.contexts.editing.storage import JsonFileStorage

STORAGE_KEY = "hireMeResumeData"

Subscriber = Callable[[ResumeData], None]


@dataclass
class LoadResult:
    """
    Outcome of restoring the store at startup.

    Attributes:
        data: Snapshot the session starts with
        source: "storage" if restored, "defaults" otherwise
        error: Why restoring failed (None if nothing was stored or restore succeeded)
    """

    data: ResumeData
    source: str
    error: Optional[str] = None

    @property
    def restored(self) -> bool:
        return self.source == "storage"


@dataclass
class PersistResult:
    """Outcome of writing the current snapshot to storage."""

    success: bool
    error: Optional[str] = None


def serialize_resume(data: ResumeData) -> str:
    """Serialize the aggregate to the persisted JSON document."""
    return json.dumps(data.to_dict(), ensure_ascii=False)


def deserialize_resume(text: str) -> ResumeData:
    """
    Parse a persisted JSON document back into an aggregate.

    Raises:
        ValueError: If text is not JSON or does not have the resume shape
    """
    return ResumeData.from_dict(json.loads(text))


class ResumeStore:
    """
    Holds the current ResumeData and persists every replacement.

    Mutation is last-writer-wins: set() replaces the aggregate with whatever it
    is given. Asynchronous write-backs should use update(), which applies a
    change to the snapshot current at write time instead of one read earlier.
    """

    def __init__(
        self,
        storage: JsonFileStorage,
        initial: Optional[ResumeData] = None,
        key: str = STORAGE_KEY,
    ):
        self.storage = storage
        self.key = key
        self._data = initial if initial is not None else ResumeData.empty()
        self._subscribers: List[Subscriber] = []
        self.last_persist: Optional[PersistResult] = None
        self._closed = False

    @classmethod
    def restore(cls, storage: JsonFileStorage, key: str = STORAGE_KEY):
        """
        Create a store from the last persisted snapshot.

        A missing key or an unreadable/unparseable value falls back to empty
        defaults; the failure is reported in the returned LoadResult and logged,
        never raised.

        Args:
            storage: Durable key-value storage
            key: Storage key holding the aggregate

        Returns:
            Tuple of (ResumeStore, LoadResult)
        """
        result = load_snapshot(storage, key)
        log_restore_result(result)
        return cls(storage, initial=result.data, key=key), result

    @property
    def data(self) -> ResumeData:
        """Current snapshot."""
        return self._data

    def set(self, next_data: ResumeData) -> PersistResult:
        """
        Replace the aggregate, persist it, and notify subscribers.

        Args:
            next_data: New snapshot

        Returns:
            PersistResult for the write to storage
        """
        if not isinstance(next_data, ResumeData):
            raise TypeError(f"Expected ResumeData, got {type(next_data).__name__}")

        self._data = next_data
        result = self.flush()

        for callback in list(self._subscribers):
            callback(next_data)

        return result

    def update(self, change: Callable[[ResumeData], ResumeData]) -> PersistResult:
        """Apply change to the latest snapshot and set the result."""
        return self.set(change(self._data))

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register callback to receive each new snapshot.

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def flush(self) -> PersistResult:
        """Write the current snapshot to storage."""
        try:
            self.storage.set_item(self.key, serialize_resume(self._data))
        except StorageError as e:
            _log_error(f"Failed to persist resume: {e.message}")
            self.last_persist = PersistResult(success=False, error=str(e))
        else:
            self.last_persist = PersistResult(success=True)
        return self.last_persist

    def close(self) -> PersistResult:
        """Flush to storage and drop all subscribers."""
        result = self.flush()
        if not self._closed:
            _log_debug(f"Closing store ({len(self._subscribers)} subscriber(s))")
        self._subscribers.clear()
        self._closed = True
        return result

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def load_snapshot(storage: JsonFileStorage, key: str = STORAGE_KEY) -> LoadResult:
    """Read and parse the persisted aggregate without creating a store."""
    try:
        saved = storage.get_item(key)
    except StorageError as e:
        return LoadResult(data=ResumeData.empty(), source="defaults", error=e.message)

    if saved is None:
        return LoadResult(data=ResumeData.empty(), source="defaults")

    try:
        data = deserialize_resume(saved)
    except (ValueError, TypeError) as e:
        # json.JSONDecodeError is a ValueError
        return LoadResult(data=ResumeData.empty(), source="defaults", error=str(e))

    return LoadResult(data=data, source="storage")
