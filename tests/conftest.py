import pytest

from tracker.logic import AttendanceStore
from tracker.storage import MemoryStore, SubjectStorage


class RecordingListener:
    def __init__(self):
        self.calls = []

    def __call__(self, subjects, stats):
        self.calls.append((subjects, stats))

    @property
    def last_stats(self):
        return self.calls[-1][1]


class FakeScheduler:
    """Stands in for tkinter's after/after_cancel."""

    def __init__(self):
        self.pending = {}
        self._next = 0

    def after(self, ms, callback):
        self._next += 1
        self.pending[self._next] = callback
        return self._next

    def after_cancel(self, handle):
        del self.pending[handle]

    def run_one(self):
        handle = min(self.pending)
        self.pending.pop(handle)()

    def run_all(self):
        while self.pending:
            self.run_one()


@pytest.fixture
def storage():
    return SubjectStorage(MemoryStore())


@pytest.fixture
def store(storage):
    s = AttendanceStore(storage)
    s.open()
    yield s
    s.close()


@pytest.fixture
def listener(store):
    recorder = RecordingListener()
    store.subscribe(recorder)
    return recorder


@pytest.fixture
def scheduler():
    return FakeScheduler()
