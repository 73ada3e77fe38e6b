import json
import logging
import os

from tracker.constants import DATA_FILE, STORAGE_KEY, STORAGE_MODE, RECORDS_FOLDER
from tracker.models import Subject

logger = logging.getLogger(__name__)


def create_folders(*paths):
    for folder in paths:
        if folder and not os.path.exists(folder):
            os.makedirs(folder)


def load_data(filepath, default):
    if os.path.exists(filepath):
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError):
            logger.exception("Failed to read %s", filepath)
            return default
    return default


def save_data(filepath, data):
    try:
        create_folders(os.path.dirname(filepath))
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=4)
        return True
    except (OSError, TypeError, ValueError):
        logger.exception("Failed to write %s", filepath)
        return False


# ==================================================
# key-value blob stores
# ==================================================

class JsonFileStore:
    """Key-value store kept as one JSON object in a file."""

    def __init__(self, filepath=DATA_FILE):
        self.filepath = filepath

    def get(self, key, default=None):
        data = load_data(self.filepath, {})
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed store file %s", self.filepath)
            return default
        return data.get(key, default)

    def set(self, key, value):
        data = load_data(self.filepath, {})
        if not isinstance(data, dict):
            data = {}
        data[key] = value
        return save_data(self.filepath, data)


class MemoryStore:
    """Session-only store; values are kept serialized so callers never share state."""

    def __init__(self):
        self._blobs = {}

    def get(self, key, default=None):
        if key not in self._blobs:
            return default
        return json.loads(self._blobs[key])

    def set(self, key, value):
        try:
            self._blobs[key] = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            logger.exception("Failed to serialize value for %s", key)
            return False
        return True


class SubjectStorage:
    def __init__(self, store, key=STORAGE_KEY):
        self.store = store
        self.key = key

    def save(self, subjects):
        ok = self.store.set(self.key, [s.to_dict() for s in subjects])
        if ok:
            logger.debug("Saved %d subjects", len(subjects))
        return ok

    def load(self):
        try:
            raw = self.store.get(self.key, [])
        except (OSError, ValueError):
            logger.exception("Failed to load subjects")
            return []

        if not isinstance(raw, list):
            logger.warning("Stored subjects under %s are not a list, starting empty", self.key)
            return []

        try:
            subjects = [Subject.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.exception("Stored subjects are malformed, starting empty")
            return []

        return drop_duplicates(subjects)


def drop_duplicates(subjects):
    """Keep the first subject per id and per case-insensitive name."""
    seen_ids = set()
    seen_names = set()
    unique = []
    for subject in subjects:
        name_key = subject.name.strip().casefold()
        if subject.id in seen_ids or name_key in seen_names:
            logger.warning("Dropping duplicate stored subject %r (%s)", subject.name, subject.id)
            continue
        seen_ids.add(subject.id)
        seen_names.add(name_key)
        unique.append(subject)
    return unique


def make_storage(mode=STORAGE_MODE, filepath=DATA_FILE):
    if mode == "memory":
        return SubjectStorage(MemoryStore())
    if mode != "file":
        logger.warning("Unknown storage mode %r, using file storage", mode)
    return SubjectStorage(JsonFileStore(filepath))


def initialize_storage(mode=STORAGE_MODE, filepath=DATA_FILE):
    create_folders(RECORDS_FOLDER)
    if mode == "file":
        create_folders(os.path.dirname(filepath))
