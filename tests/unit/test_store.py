"""Unit tests for ResumeStore: persistence, restore and subscriptions."""

import json

import pytest

from hireme.contexts.editing.resume_data_structure import PersonalInfo, ResumeData
from hireme.contexts.editing.storage import JsonFileStorage
from hireme.contexts.editing.store import (
    STORAGE_KEY,
    ResumeStore,
    deserialize_resume,
    load_snapshot,
    serialize_resume,
)


@pytest.mark.unit
def test_new_store_starts_empty(store):
    assert store.data == ResumeData.empty()


@pytest.mark.unit
def test_set_persists_under_fixed_key(store, storage, sample_resume):
    result = store.set(sample_resume)

    assert result.success
    saved = json.loads(storage.get_item(STORAGE_KEY))
    assert saved["personalInfo"]["fullName"] == "Jane Doe"
    assert saved["targetJobDescription"] == sample_resume.target_job_description


@pytest.mark.unit
def test_set_rejects_non_resume(store):
    with pytest.raises(TypeError):
        store.set({"personalInfo": {}})


@pytest.mark.unit
def test_restore_round_trip(storage, sample_resume):
    ResumeStore(storage).set(sample_resume)

    restored, result = ResumeStore.restore(storage)

    assert result.restored
    assert result.error is None
    assert restored.data == sample_resume


@pytest.mark.unit
def test_restore_without_saved_data_uses_defaults(storage):
    restored, result = ResumeStore.restore(storage)

    assert result.source == "defaults"
    assert result.error is None
    assert restored.data == ResumeData.empty()


@pytest.mark.unit
def test_restore_with_corrupt_value_uses_defaults(storage):
    storage.set_item(STORAGE_KEY, "{this is not json")

    restored, result = ResumeStore.restore(storage)

    assert not result.restored
    assert result.error
    assert restored.data == ResumeData.empty()


@pytest.mark.unit
def test_restore_with_corrupt_file_uses_defaults(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2", encoding="utf-8")

    restored, result = ResumeStore.restore(JsonFileStorage(path))

    assert result.source == "defaults"
    assert result.error
    assert restored.data == ResumeData.empty()


@pytest.mark.unit
def test_subscribers_receive_each_snapshot(store, sample_resume):
    seen = []
    unsubscribe = store.subscribe(seen.append)

    store.set(sample_resume)
    unsubscribe()
    store.set(ResumeData.empty())

    assert seen == [sample_resume]


@pytest.mark.unit
def test_update_applies_change_to_latest_snapshot(store):
    """A change computed late still keeps edits made in the meantime."""
    store.set(ResumeData(personal_info=PersonalInfo(full_name="Jane")))
    store.set(ResumeData(personal_info=PersonalInfo(full_name="Jane", email="jane@example.com")))

    store.update(
        lambda data: ResumeData(
            personal_info=PersonalInfo(
                full_name=data.personal_info.full_name,
                email=data.personal_info.email,
                summary="Generated",
            )
        )
    )

    assert store.data.personal_info.email == "jane@example.com"
    assert store.data.personal_info.summary == "Generated"


@pytest.mark.unit
def test_write_failure_is_recorded_not_raised(tmp_path, sample_resume):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = ResumeStore(JsonFileStorage(blocker / "store.json"))

    result = store.set(sample_resume)

    assert not result.success
    assert result.error
    assert store.last_persist is result
    # In-memory state still moves forward
    assert store.data == sample_resume


@pytest.mark.unit
def test_close_flushes_and_drops_subscribers(store, storage, sample_resume):
    seen = []
    store.subscribe(seen.append)

    with store:
        store.set(sample_resume)

    assert load_snapshot(storage).data == sample_resume
    store.set(ResumeData.empty())
    assert seen == [sample_resume]


@pytest.mark.unit
def test_serialize_deserialize(sample_resume):
    assert deserialize_resume(serialize_resume(sample_resume)) == sample_resume

    with pytest.raises(ValueError):
        deserialize_resume("not json")
