import logging

from tracker.constants import STATUS_SCHEMES, STATUS_SCHEME
from tracker.exceptions import ValidationError
from tracker.models import Outcome, Statistics, StatusTier, Subject

logger = logging.getLogger(__name__)

# ==================================================
# derived values
# ==================================================

def classify_status(percentage, scheme=STATUS_SCHEME):
    if scheme not in STATUS_SCHEMES:
        raise ValueError(f"Unknown status scheme: {scheme}")
    for minimum, tier in STATUS_SCHEMES[scheme]:
        if percentage >= minimum:
            return StatusTier(tier)
    return StatusTier.DANGER


def compute_statistics(subjects):
    total_attended = sum(s.attended for s in subjects)
    total_missed = sum(s.missed for s in subjects)
    total = total_attended + total_missed

    overall = total_attended / total * 100 if total > 0 else None

    return Statistics(
        subject_count=len(subjects),
        total_attended=total_attended,
        total_missed=total_missed,
        overall_percentage=overall,
    )


# ==================================================
# store
# ==================================================

class AttendanceStore:
    """Owns the subject list and keeps persistence and listeners in step with it.

    Every successful mutation saves the list and calls each subscriber with
    ``(subjects, statistics)``. Lookups by an unknown id are silent no-ops.
    """

    def __init__(self, storage, scheme=STATUS_SCHEME):
        if scheme not in STATUS_SCHEMES:
            raise ValueError(f"Unknown status scheme: {scheme}")
        self.storage = storage
        self.scheme = scheme
        self._subjects = []
        self._listeners = []
        self.is_open = False

    def open(self):
        self._subjects = self.storage.load()
        self.is_open = True
        logger.info("Loaded %d subjects", len(self._subjects))
        self._notify()
        return self

    def close(self):
        if self.is_open:
            self.storage.save(self._subjects)
        self._listeners.clear()
        self.is_open = False

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def subscribe(self, listener):
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def subjects(self):
        return tuple(self._subjects)

    def get(self, subject_id):
        for subject in self._subjects:
            if subject.id == subject_id:
                return subject
        return None

    def find_by_name(self, name):
        key = name.strip().casefold()
        for subject in self._subjects:
            if subject.name.casefold() == key:
                return subject
        return None

    def statistics(self):
        return compute_statistics(self._subjects)

    def status_of(self, subject):
        return classify_status(subject.percentage, self.scheme)

    def chart_series(self):
        names = [s.name for s in self._subjects]
        attended = [s.attended for s in self._subjects]
        missed = [s.missed for s in self._subjects]
        return names, attended, missed

    # --------------------------------------------------
    # mutations
    # --------------------------------------------------

    def add(self, name):
        name = (name or "").strip()
        if not name:
            raise ValidationError("Please enter a subject name")
        if self.find_by_name(name) is not None:
            raise ValidationError("Subject already exists")

        subject = Subject(name=name)
        self._subjects.append(subject)
        logger.info("Added subject %s (%s)", name, subject.id)
        self._changed()
        return subject

    def record(self, subject_id, outcome):
        outcome = Outcome(outcome)
        subject = self.get(subject_id)
        if subject is None:
            logger.debug("Ignoring %s for unknown subject %s", outcome.value, subject_id)
            return None

        if outcome is Outcome.PRESENT:
            subject.attended += 1
        else:
            subject.missed += 1
        logger.info("Recorded %s for %s", outcome.value, subject.name)
        self._changed()
        return subject

    def delete(self, subject_id):
        subject = self.get(subject_id)
        if subject is None:
            logger.debug("Ignoring delete of unknown subject %s", subject_id)
            return None

        self._subjects.remove(subject)
        logger.info("Deleted subject %s", subject.name)
        self._changed()
        return subject

    def reset_all(self):
        count = len(self._subjects)
        self._subjects = []
        logger.info("Reset %d subjects", count)
        self._changed()

    def _changed(self):
        self.storage.save(self._subjects)
        self._notify()

    def _notify(self):
        snapshot = self.subjects
        stats = self.statistics()
        for listener in list(self._listeners):
            listener(snapshot, stats)
