"""Port interface for non-blocking user notifications."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from scrapmap.domain.value_objects.enums import NoticeLevel


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    level: NoticeLevel = NoticeLevel.INFO


class NotifierPort(ABC):
    @abstractmethod
    def notify(self, notice: Notice) -> None:
        ...
