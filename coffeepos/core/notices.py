"""Transient user-facing notices"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notice:
    """Message shown to the cashier until it expires"""
    level: NoticeLevel
    message: str
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(NoticeLevel.SUCCESS, message)

    @classmethod
    def warning(cls, message: str) -> "Notice":
        return cls(NoticeLevel.WARNING, message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(NoticeLevel.ERROR, message)

    def is_expired(self, ttl_seconds: float, now: Optional[datetime] = None) -> bool:
        now = now or datetime.utcnow()
        return now - self.created_at >= timedelta(seconds=ttl_seconds)

    def to_dict(self) -> dict:
        return {
            "level": self.level.value,
            "message": self.message,
            "created_at": self.created_at.isoformat(),
        }


class NoticeBoard:
    """Auto-dismissing notices; reading prunes whatever has expired"""

    def __init__(self, ttl_seconds: float = 5.0):
        self.ttl_seconds = ttl_seconds
        self._notices: list[Notice] = []

    def post(self, notice: Notice) -> Notice:
        self._notices.append(notice)
        return notice

    def active(self, now: Optional[datetime] = None) -> list[Notice]:
        self._notices = [
            n for n in self._notices
            if not n.is_expired(self.ttl_seconds, now)
        ]
        return list(self._notices)

    def clear(self) -> None:
        self._notices = []

    def __len__(self) -> int:
        return len(self._notices)
