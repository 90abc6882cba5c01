"""Notifier adapter that writes user notices to the application log."""

import logging

from scrapmap.application.ports.notifier_port import Notice, NotifierPort
from scrapmap.domain.value_objects.enums import NoticeLevel

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    NoticeLevel.INFO: logging.INFO,
    NoticeLevel.WARNING: logging.WARNING,
    NoticeLevel.ERROR: logging.ERROR,
}


class LoggingNotifier(NotifierPort):
    def __init__(self):
        self.notices: list[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)
        logger.log(_LOG_LEVELS[notice.level], "%s: %s", notice.title, notice.description)
