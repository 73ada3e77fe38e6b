import logging
from enum import Enum

from tracker.exceptions import UnknownActionError, ValidationError
from tracker.models import Outcome

logger = logging.getLogger(__name__)


class Action(str, Enum):
    ADD = "add"
    PRESENT = "present"
    ABSENT = "absent"
    DELETE = "delete"
    RESET = "reset"


class Dispatcher:
    """Maps UI actions onto store operations.

    ``notify(message, severity)`` shows a transient message and
    ``confirm(title, message)`` returns True when the user agrees.
    """

    def __init__(self, store, notify, confirm):
        self.store = store
        self.notify = notify
        self.confirm = confirm
        self.handlers = {
            Action.ADD: self.add_subject,
            Action.PRESENT: self.mark_present,
            Action.ABSENT: self.mark_absent,
            Action.DELETE: self.delete_subject,
            Action.RESET: self.reset_all,
        }

    def dispatch(self, action, **payload):
        try:
            handler = self.handlers[Action(action)]
        except (KeyError, ValueError):
            raise UnknownActionError(action) from None
        return handler(**payload)

    def add_subject(self, name):
        try:
            subject = self.store.add(name)
        except ValidationError as e:
            logger.info("Rejected subject name %r: %s", name, e)
            self.notify(str(e), "error")
            return None
        self.notify(f"{subject.name} added successfully!", "success")
        return subject

    def mark_present(self, subject_id):
        subject = self.store.record(subject_id, Outcome.PRESENT)
        if subject is not None:
            self.notify("Attendance marked ✓", "success")
        return subject

    def mark_absent(self, subject_id):
        subject = self.store.record(subject_id, Outcome.ABSENT)
        if subject is not None:
            self.notify("Absence recorded ✗", "info")
        return subject

    def delete_subject(self, subject_id):
        subject = self.store.get(subject_id)
        if subject is None:
            return None
        if not self.confirm("Delete subject", f"Are you sure you want to delete {subject.name}?"):
            return None
        self.store.delete(subject_id)
        self.notify(f"{subject.name} deleted", "info")
        return subject

    def reset_all(self):
        if not self.confirm("Reset", "Are you sure you want to reset all data?"):
            return False
        self.store.reset_all()
        self.notify("All data has been reset", "success")
        return True
