import pytest

from tracker.exceptions import ValidationError
from tracker.logic import AttendanceStore, classify_status, compute_statistics
from tracker.models import Outcome, StatusTier, Subject
from tracker.storage import MemoryStore, SubjectStorage


def test_add_appends_subject_with_zero_counters(store, listener):
    subject = store.add("  Math  ")

    assert len(store.subjects) == 1
    assert subject.name == "Math"
    assert subject.attended == 0
    assert subject.missed == 0
    assert subject.total == 0
    assert listener.last_stats.subject_count == 1


@pytest.mark.parametrize("name", ["", "   ", None])
def test_add_rejects_blank_names(store, name):
    with pytest.raises(ValidationError):
        store.add(name)
    assert store.subjects == ()


def test_add_rejects_duplicate_names_case_insensitively(store, listener):
    store.add("Math")
    calls = len(listener.calls)

    with pytest.raises(ValidationError, match="already exists"):
        store.add("mATH")

    assert len(store.subjects) == 1
    assert len(listener.calls) == calls


def test_subjects_get_distinct_stable_ids(store):
    a = store.add("Math")
    b = store.add("Physics")
    assert a.id != b.id

    store.delete(a.id)
    assert store.get(b.id) is b


def test_record_present_and_absent(store):
    subject = store.add("Math")

    store.record(subject.id, Outcome.PRESENT)
    assert (subject.attended, subject.missed) == (1, 0)

    store.record(subject.id, "absent")
    assert (subject.attended, subject.missed) == (1, 1)
    assert subject.total == 2


def test_record_unknown_id_is_silent_noop(store, listener):
    store.add("Math")
    calls = len(listener.calls)

    assert store.record("missing", Outcome.PRESENT) is None
    assert len(listener.calls) == calls


def test_record_rejects_unknown_outcome(store):
    subject = store.add("Math")
    with pytest.raises(ValueError):
        store.record(subject.id, "late")


def test_delete_then_readd_same_name(store):
    subject = store.add("Math")
    assert store.delete(subject.id) is subject
    assert store.subjects == ()

    again = store.add("MATH")
    assert again.id != subject.id


def test_delete_unknown_id_is_noop(store):
    store.add("Math")
    assert store.delete("missing") is None
    assert len(store.subjects) == 1


def test_reset_all_clears_everything(store, listener):
    math = store.add("Math")
    store.add("Physics")
    store.record(math.id, Outcome.PRESENT)

    store.reset_all()

    assert store.subjects == ()
    stats = listener.last_stats
    assert stats.subject_count == 0
    assert stats.overall_percentage is None
    assert stats.overall_display == "N/A"


def test_mutations_are_persisted(storage):
    store = AttendanceStore(storage).open()
    math = store.add("Math")
    store.record(math.id, Outcome.ABSENT)

    reopened = AttendanceStore(storage).open()
    assert [s.to_dict() for s in reopened.subjects] == [math.to_dict()]


def test_context_manager_closes_and_drops_listeners(storage):
    calls = []
    with AttendanceStore(storage) as store:
        store.subscribe(lambda subjects, stats: calls.append(stats))
        store.add("Math")
    assert not store.is_open

    store.reset_all()
    assert len(calls) == 1


def test_open_notifies_subscribers(storage):
    storage.save([Subject(name="Math", attended=2, missed=2)])
    store = AttendanceStore(storage)
    seen = []
    store.subscribe(lambda subjects, stats: seen.append(stats))

    store.open()

    assert seen[0].overall_percentage == 50.0


def test_unknown_scheme_is_rejected():
    with pytest.raises(ValueError):
        AttendanceStore(SubjectStorage(MemoryStore()), scheme="strict")


def test_chart_series_is_parallel(store):
    math = store.add("Math")
    store.add("Physics")
    store.record(math.id, Outcome.PRESENT)

    assert store.chart_series() == (["Math", "Physics"], [1, 0], [0, 0])


@pytest.mark.parametrize("percentage, standard, lenient", [
    (100.0, StatusTier.SAFE, StatusTier.SAFE),
    (75.0, StatusTier.SAFE, StatusTier.SAFE),
    (74.9, StatusTier.CAUTION, StatusTier.CAUTION),
    (65.0, StatusTier.CAUTION, StatusTier.CAUTION),
    (60.0, StatusTier.DANGER, StatusTier.CAUTION),
    (50.0, StatusTier.DANGER, StatusTier.CAUTION),
    (49.9, StatusTier.DANGER, StatusTier.DANGER),
    (0.0, StatusTier.DANGER, StatusTier.DANGER),
])
def test_classify_status(percentage, standard, lenient):
    assert classify_status(percentage, "standard") is standard
    assert classify_status(percentage, "lenient") is lenient


def test_compute_statistics_without_sessions():
    stats = compute_statistics([Subject(name="Math")])
    assert stats.subject_count == 1
    assert stats.total_sessions == 0
    assert stats.overall_percentage is None


def test_compute_statistics_aggregates():
    stats = compute_statistics([
        Subject(name="Math", attended=3, missed=1),
        Subject(name="Physics", attended=1, missed=3),
    ])
    assert stats.total_attended == 4
    assert stats.total_missed == 4
    assert stats.overall_percentage == 50.0
    assert stats.overall_display == "50.0%"


def test_math_scenario(store, listener):
    math = store.add("Math")
    with pytest.raises(ValidationError):
        store.add("math")
    assert len(store.subjects) == 1

    for _ in range(3):
        store.record(math.id, Outcome.PRESENT)
    store.record(math.id, Outcome.ABSENT)

    assert (math.attended, math.missed) == (3, 1)
    assert math.percentage == 75.0
    assert store.status_of(math) is StatusTier.SAFE
    assert classify_status(math.percentage, "lenient") is StatusTier.SAFE

    store.delete(math.id)
    assert listener.last_stats.subject_count == 0
    assert listener.last_stats.overall_display == "N/A"
