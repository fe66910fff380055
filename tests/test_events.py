#!/usr/bin/env python3
"""Tests for file-open events."""

import dataclasses

import pytest

from edconf.events import FileEvent, FileOpenedEvents


class TestFileEvent:
    """Tests for FileEvent."""

    def test_defaults(self):
        """remote_marker defaults to None."""
        event = FileEvent("/a/foo.txt")
        assert event.path == "/a/foo.txt"
        assert event.remote_marker is None

    def test_immutable(self):
        """Events cannot be modified."""
        event = FileEvent("/a/foo.txt")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.path = "/b"


class TestFileOpenedEvents:
    """Tests for FileOpenedEvents."""

    def test_emit_delivers_event(self):
        """Handlers receive a FileEvent built from emit's arguments."""
        events = FileOpenedEvents()
        received = []
        events.subscribe(received.append)
        events.emit("/ssh:h:/etc/hosts", remote_marker="/ssh:h:")
        assert received == [FileEvent("/ssh:h:/etc/hosts", "/ssh:h:")]

    def test_subscription_order(self):
        """Handlers run in subscription order and results are returned."""
        events = FileOpenedEvents()
        events.subscribe(lambda e: "first")
        events.subscribe(lambda e: "second")
        assert events.emit("/a") == ["first", "second"]

    def test_subscribe_twice(self):
        """A handler is only subscribed once."""
        events = FileOpenedEvents()
        received = []
        events.subscribe(received.append)
        events.subscribe(received.append)
        events.emit("/a")
        assert len(received) == 1
        assert len(events) == 1

    def test_unsubscribe(self):
        """Unsubscribed handlers no longer receive events."""
        events = FileOpenedEvents()
        received = []
        events.subscribe(received.append)
        assert events.unsubscribe(received.append)
        assert not events.unsubscribe(received.append)
        events.emit("/a")
        assert received == []

    def test_handler_errors_propagate(self):
        """Exceptions from a handler reach the emitter."""
        events = FileOpenedEvents()

        def broken(event):
            raise RuntimeError("boom")

        events.subscribe(broken)
        with pytest.raises(RuntimeError):
            events.emit("/a")
