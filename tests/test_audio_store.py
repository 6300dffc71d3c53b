import io

import pytest
from fakes import InMemoryStorage

from dream_analyzer.exceptions import InputError
from dream_analyzer.handlers import AudioStore


def _store(storage, limit=1024 * 1024):
    return AudioStore(storage, "dream-audio", limit)


def test_put_stores_audio_under_owner_prefix(storage, audio_bytes) -> None:
    resource = _store(storage).put(audio_bytes, 2052, "audio/webm", 12.5, "owner-1")

    assert resource.object_name.startswith("owner-1/")
    assert resource.object_name.endswith(".webm")
    assert resource.size_bytes == 2052
    assert resource.duration_seconds == 12.5
    assert ("dream-audio", resource.object_name) in storage.objects


def test_put_rejects_empty_upload(storage) -> None:
    with pytest.raises(InputError):
        _store(storage).put(io.BytesIO(b""), 0, "audio/webm", 0.0, "owner-1")

    assert storage.objects == {}


def test_put_rejects_oversized_upload(storage, audio_bytes) -> None:
    with pytest.raises(InputError):
        _store(storage, limit=1024).put(audio_bytes, 2052, "audio/webm", 0.0, "owner-1")

    assert storage.objects == {}


def test_hold_downloads_once_and_releases_on_exit(storage, audio_bytes) -> None:
    store = _store(storage)
    resource = store.put(audio_bytes, 2052, "audio/webm", 0.0, "owner-1")

    with store.hold(resource) as held:
        first = held.read()
        second = held.read()

    assert first == second
    assert storage.downloads == 1
    assert storage.removed == [resource.object_name]
    assert storage.objects == {}


def test_explicit_release_is_not_repeated_on_exit(storage, audio_bytes) -> None:
    store = _store(storage)
    resource = store.put(audio_bytes, 2052, "audio/webm", 0.0, "owner-1")

    with store.hold(resource) as held:
        held.read()
        held.release()
        held.release()

    assert storage.removed == [resource.object_name]


def test_release_happens_when_the_body_raises(storage, audio_bytes) -> None:
    store = _store(storage)
    resource = store.put(audio_bytes, 2052, "audio/webm", 0.0, "owner-1")

    with pytest.raises(RuntimeError):
        with store.hold(resource):
            raise RuntimeError("transcription blew up")

    assert storage.removed == [resource.object_name]


def test_delete_failure_is_logged_not_raised(audio_bytes) -> None:
    storage = InMemoryStorage(fail_remove=True)
    store = _store(storage)
    resource = store.put(audio_bytes, 2052, "audio/webm", 0.0, "owner-1")

    with store.hold(resource) as held:
        held.read()

    assert held.released
    assert storage.removed == [resource.object_name]


def test_read_after_release_is_refused(storage, audio_bytes) -> None:
    store = _store(storage)
    resource = store.put(audio_bytes, 2052, "audio/webm", 0.0, "owner-1")

    with store.hold(resource) as held:
        pass

    with pytest.raises(RuntimeError):
        held.read()


@pytest.mark.parametrize("duration", [float("nan"), float("inf"), -1.0])
def test_put_rejects_invalid_duration_before_upload(storage, audio_bytes, duration) -> None:
    with pytest.raises(InputError):
        _store(storage).put(audio_bytes, 2052, "audio/webm", duration, "owner-1")

    assert storage.objects == {}
