"""Tests for the ready-made notification listeners."""

from __future__ import annotations

import logging

import pytest

from tradeloop.core.notifications import Notification, Notifier
from tradeloop.infra.listeners import LoggingListener, RecordingListener


class TestLoggingListener:
    @pytest.mark.asyncio
    async def test_logs_notifications(self, caplog):
        notifier = Notifier()
        LoggingListener(label="partner").attach(notifier)

        with caplog.at_level(logging.INFO, logger="tradeloop.infra.listeners"):
            await notifier.emit(Notification.MESSAGE, "hello")
            await notifier.emit(Notification.ERROR, "bad item")

        records = [r for r in caplog.records if r.name == "tradeloop.infra.listeners"]
        assert len(records) == 2
        assert "message" in records[0].getMessage()
        assert "hello" in records[0].getMessage()
        assert records[1].levelno == logging.WARNING

    def test_attaches_to_every_kind(self):
        notifier = Notifier()
        LoggingListener().attach(notifier)
        assert all(notifier.subscriber_count(kind) == 1 for kind in Notification)


class TestRecordingListener:
    @pytest.mark.asyncio
    async def test_records_in_order(self):
        notifier = Notifier()
        listener = RecordingListener()
        listener.attach(notifier)

        await notifier.emit(Notification.INITIALIZED)
        await notifier.emit(Notification.READY_CHANGED, True)

        assert listener.received == [
            (Notification.INITIALIZED, ()),
            (Notification.READY_CHANGED, (True,)),
        ]
        assert listener.count(Notification.READY_CHANGED) == 1

        listener.reset()
        assert listener.received == []
