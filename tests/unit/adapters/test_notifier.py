"""Tests for LoggingNotifier."""

import logging

from scrapmap.adapters.notifier.logging_notifier import LoggingNotifier
from scrapmap.application.ports.notifier_port import Notice
from scrapmap.domain.value_objects.enums import NoticeLevel


def test_notice_is_recorded_and_logged_at_its_level(caplog):
    notifier = LoggingNotifier()

    with caplog.at_level(logging.INFO):
        notifier.notify(Notice(title="Error", description="Failed", level=NoticeLevel.ERROR))
        notifier.notify(Notice(title="Pickup Location Set", description="Saved"))

    assert [n.title for n in notifier.notices] == ["Error", "Pickup Location Set"]
    assert [r.levelno for r in caplog.records[-2:]] == [logging.ERROR, logging.INFO]
