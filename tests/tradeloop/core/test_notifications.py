"""Tests for the Notifier subscription lists."""

from __future__ import annotations

import pytest

from tradeloop.core.notifications import Notification, Notifier


class TestSubscribe:
    def test_accepts_string_kinds(self):
        notifier = Notifier()
        notifier.subscribe("message", lambda text: None)
        assert notifier.subscriber_count(Notification.MESSAGE) == 1

    def test_unknown_kind_rejected(self):
        notifier = Notifier()
        with pytest.raises(ValueError):
            notifier.subscribe("nope", lambda: None)

    def test_unsubscribe(self):
        notifier = Notifier()
        cb = notifier.subscribe(Notification.ACCEPTED, lambda: None)
        assert notifier.unsubscribe(Notification.ACCEPTED, cb) is True
        assert notifier.unsubscribe(Notification.ACCEPTED, cb) is False
        assert notifier.subscriber_count(Notification.ACCEPTED) == 0


class TestEmit:
    @pytest.mark.asyncio
    async def test_registration_order(self):
        notifier = Notifier()
        calls = []
        notifier.subscribe(Notification.MESSAGE, lambda t: calls.append(("a", t)))
        notifier.subscribe(Notification.MESSAGE, lambda t: calls.append(("b", t)))

        await notifier.emit(Notification.MESSAGE, "hello")

        assert calls == [("a", "hello"), ("b", "hello")]

    @pytest.mark.asyncio
    async def test_coroutine_callbacks_are_awaited_in_order(self):
        notifier = Notifier()
        calls = []

        async def first(ready):
            calls.append(("async", ready))

        notifier.subscribe(Notification.READY_CHANGED, first)
        notifier.subscribe(Notification.READY_CHANGED, lambda r: calls.append(("sync", r)))

        await notifier.emit(Notification.READY_CHANGED, True)

        assert calls == [("async", True), ("sync", True)]

    @pytest.mark.asyncio
    async def test_decorator_form(self):
        notifier = Notifier()
        calls = []

        @notifier.on(Notification.CLOSED)
        def on_close():
            calls.append("closed")

        await notifier.emit(Notification.CLOSED)
        assert calls == ["closed"]

    @pytest.mark.asyncio
    async def test_only_matching_kind_fires(self):
        notifier = Notifier()
        calls = []
        notifier.subscribe(Notification.ACCEPTED, lambda: calls.append("accepted"))

        await notifier.emit(Notification.CLOSED)

        assert calls == []

    @pytest.mark.asyncio
    async def test_callback_may_unsubscribe_itself(self):
        notifier = Notifier()
        calls = []

        def once():
            calls.append(1)
            notifier.unsubscribe(Notification.INITIALIZED, once)

        notifier.subscribe(Notification.INITIALIZED, once)
        await notifier.emit(Notification.INITIALIZED)
        await notifier.emit(Notification.INITIALIZED)

        assert calls == [1]
