from assistant_backend.models.stream import FileStatus
from assistant_backend.services.file_events import file_progress_reducer, is_file_event


def test_handles_file_start():
    state = file_progress_reducer({}, {"type": "file.start", "payload": {"path": "a.ts", "kind": "ts"}})
    assert state["a.ts"].status == FileStatus.WRITING
    assert state["a.ts"].kind == "ts"
    assert state["a.ts"].bytes == 0


def test_accumulates_bytes_on_chunk():
    s1 = file_progress_reducer({}, {"type": "file.start", "payload": {"path": "a.ts", "kind": "ts"}})
    s2 = file_progress_reducer(s1, {"type": "file.chunk", "payload": {"path": "a.ts", "bytes": 100}})
    s3 = file_progress_reducer(s2, {"type": "file.chunk", "payload": {"path": "a.ts", "bytes": 50}})
    assert s3["a.ts"].bytes == 150
    assert s3["a.ts"].status == FileStatus.WRITING


def test_marks_done_with_final_bytes():
    s1 = file_progress_reducer({}, {"type": "file.start", "payload": {"path": "a.ts"}})
    s2 = file_progress_reducer(s1, {"type": "file.chunk", "payload": {"path": "a.ts", "bytes": 100}})
    s3 = file_progress_reducer(s2, {"type": "file.done", "payload": {"path": "a.ts", "bytes": 120}})
    assert s3["a.ts"].status == FileStatus.DONE
    assert s3["a.ts"].bytes == 120


def test_done_without_bytes_keeps_counted_bytes():
    s1 = file_progress_reducer({}, {"type": "file.chunk", "payload": {"path": "a.ts", "bytes": 7}})
    s2 = file_progress_reducer(s1, {"type": "file.done", "payload": {"path": "a.ts"}})
    assert s2["a.ts"].bytes == 7


def test_marks_error_with_message():
    s1 = file_progress_reducer({}, {"type": "file.start", "payload": {"path": "a.ts"}})
    s2 = file_progress_reducer(s1, {"type": "file.error", "payload": {"path": "a.ts", "message": "fail"}})
    assert s2["a.ts"].status == FileStatus.ERROR
    assert s2["a.ts"].message == "fail"


def test_does_not_mutate_previous_state():
    s1 = file_progress_reducer({}, {"type": "file.start", "payload": {"path": "a.ts"}})
    file_progress_reducer(s1, {"type": "file.done", "payload": {"path": "a.ts"}})
    assert s1["a.ts"].status == FileStatus.WRITING


def test_ignores_other_events():
    state = {}
    assert file_progress_reducer(state, {"type": "token", "text": "hi"}) is state
    assert file_progress_reducer(state, {"type": "file.start", "payload": {}}) is state


def test_is_file_event():
    assert is_file_event({"type": "file.done", "payload": {"path": "a.ts"}})
    assert not is_file_event({"type": "status"})
    assert not is_file_event(["file.start"])
    assert not is_file_event(None)


def test_ignores_malformed_payload_fields():
    s1 = file_progress_reducer({}, {"type": "file.start", "payload": {"path": "a.ts", "kind": 3}})
    s2 = file_progress_reducer(s1, {"type": "file.chunk", "payload": {"path": "a.ts", "bytes": "12"}})
    s3 = file_progress_reducer(s2, {"type": "file.chunk", "payload": {"path": "a.ts", "bytes": 5}})
    s4 = file_progress_reducer(s3, {"type": "file.error", "payload": {"path": "a.ts", "message": {"code": 1}}})
    assert s1["a.ts"].kind is None
    assert s2["a.ts"].bytes == 0
    assert s3["a.ts"].bytes == 5
    assert s4["a.ts"].status == FileStatus.ERROR
    assert s4["a.ts"].message is None


def test_done_with_non_integer_bytes_keeps_counted_bytes():
    s1 = file_progress_reducer({}, {"type": "file.chunk", "payload": {"path": "a.ts", "bytes": 7}})
    s2 = file_progress_reducer(s1, {"type": "file.done", "payload": {"path": "a.ts", "bytes": True}})
    assert s2["a.ts"].bytes == 7
