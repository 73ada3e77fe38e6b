import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class StatusTier(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    DANGER = "danger"

    @property
    def label(self):
        return self.value.capitalize()

    @property
    def icon(self):
        return {"safe": "✅", "caution": "⚠️", "danger": "🚨"}[self.value]


def generate_id():
    return uuid.uuid4().hex


def utc_now_iso():
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Subject:
    name: str
    attended: int = 0
    missed: int = 0
    id: str = field(default_factory=generate_id)
    created_at: str = field(default_factory=utc_now_iso)

    @property
    def total(self) -> int:
        return self.attended + self.missed

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.attended / self.total * 100

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "attended": self.attended,
            "missed": self.missed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data):
        """Build a subject from its stored form.

        Records written by the older tracker carry ``total`` instead of
        ``missed`` and have no id; both shapes are accepted.
        """
        attended = int(data.get("attended", 0))
        if "missed" in data:
            missed = int(data["missed"])
        else:
            missed = max(int(data.get("total", 0)) - attended, 0)
        if attended < 0 or missed < 0:
            raise ValueError(f"Negative attendance counters for {data.get('name')!r}")

        kwargs = {}
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        if data.get("createdAt"):
            kwargs["created_at"] = data["createdAt"]

        return cls(name=data["name"], attended=attended, missed=missed, **kwargs)


@dataclass(frozen=True)
class Statistics:
    subject_count: int
    total_attended: int
    total_missed: int
    overall_percentage: Optional[float]

    @property
    def total_sessions(self) -> int:
        return self.total_attended + self.total_missed

    @property
    def overall_display(self) -> str:
        if self.overall_percentage is None:
            return "N/A"
        return f"{self.overall_percentage:.1f}%"
