import pytest

from tracker.models import Statistics, StatusTier, Subject


def test_subject_percentage_bounds():
    assert Subject(name="Math").percentage == 0.0
    assert Subject(name="Math", attended=5).percentage == 100.0
    assert Subject(name="Math", missed=5).percentage == 0.0
    assert Subject(name="Math", attended=1, missed=2).percentage == pytest.approx(100 / 3)


def test_subject_dict_uses_stored_field_names():
    subject = Subject(name="Math", attended=2, missed=1, id="x1", created_at="2026-01-01T00:00:00+00:00")
    assert subject.to_dict() == {
        "id": "x1",
        "name": "Math",
        "attended": 2,
        "missed": 1,
        "createdAt": "2026-01-01T00:00:00+00:00",
    }
    assert Subject.from_dict(subject.to_dict()) == subject


def test_legacy_total_never_goes_negative():
    subject = Subject.from_dict({"name": "Math", "attended": 5, "total": 3})
    assert subject.missed == 0


def test_status_tier_labels():
    assert StatusTier.SAFE.label == "Safe"
    assert StatusTier.DANGER.icon == "🚨"


def test_statistics_display():
    assert Statistics(0, 0, 0, None).overall_display == "N/A"
    assert Statistics(1, 2, 1, 200 / 3).overall_display == "66.7%"


def test_negative_counters_raise():
    with pytest.raises(ValueError):
        Subject.from_dict({"name": "Math", "attended": -1, "missed": 2})
    with pytest.raises(ValueError):
        Subject.from_dict({"name": "Math", "attended": -2, "total": 0})
