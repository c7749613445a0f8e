"""Tests for ReactiveCell and the write error policy."""

import logging

import pytest

from cellfx import (
    NotificationError,
    ReactiveCell,
    get_error_policy,
    set_error_policy,
)
from cellfx._tracking import tracking


@pytest.fixture
def collect_policy():
    set_error_policy("collect")
    yield
    set_error_policy("propagate")


class TestReactiveCell:
    def test_get_set(self):
        r = ReactiveCell(42)
        assert r.get() == 42
        r.set(100)
        assert r.get() == 100

    def test_uninitialized_is_none(self):
        assert ReactiveCell().get() is None

    def test_read_outside_derivation_registers_nothing(self):
        r = ReactiveCell(1)
        r.get()
        assert r.subscriber_count == 0

    def test_read_registers_once(self):
        r = ReactiveCell(1)
        log = []
        sub = lambda: log.append(r.peek())
        with tracking(sub):
            r.get()
            r.get()
        assert r.subscriber_count == 1
        r.set(2)
        assert log == [2]

    def test_peek_does_not_track(self):
        r = ReactiveCell(1)
        with tracking(lambda: None):
            assert r.peek() == 1
        assert r.subscriber_count == 0

    def test_notifies_in_registration_order(self):
        r = ReactiveCell(0)
        log = []
        a = lambda: log.append("a")
        b = lambda: log.append("b")
        with tracking(b):
            r.get()
        with tracking(a):
            r.get()
        r.set(1)
        assert log == ["b", "a"]

    def test_same_value_still_notifies(self):
        r = ReactiveCell(5)
        log = []
        with tracking(lambda: log.append(r.peek())):
            r.get()
        r.set(5)
        assert log == [5]

    def test_subscriber_added_during_write_waits(self):
        r = ReactiveCell(0)
        log = []
        late = lambda: log.append("late")

        def early():
            log.append("early")
            with tracking(late):
                r.get()

        with tracking(early):
            r.get()
        r.set(1)
        assert log == ["early"]
        r.set(2)
        assert log == ["early", "early", "late"]

    def test_nested_subscribers_all_register(self):
        r = ReactiveCell(0)
        outer = lambda: None
        inner = lambda: None
        with tracking(outer):
            with tracking(inner):
                r.get()
        assert r.subscriber_count == 2

    def test_registration_logged_once(self, caplog):
        r = ReactiveCell(1)
        with caplog.at_level(logging.DEBUG, logger="cellfx.reactive"):
            with tracking(lambda: None):
                r.get()
                r.get()
        registered = [
            rec for rec in caplog.records if rec.getMessage().startswith("Registered subscriber")
        ]
        assert len(registered) == 1
        assert registered[0].levelno == logging.DEBUG

    def test_repr(self):
        assert repr(ReactiveCell([1])) == "ReactiveCell([1])"


class TestErrorPolicy:
    def test_default_is_propagate(self):
        assert get_error_policy() == "propagate"

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValueError):
            set_error_policy("ignore")
        assert get_error_policy() == "propagate"

    def test_propagate_aborts_remaining(self):
        r = ReactiveCell(0)
        log = []

        def bad():
            raise RuntimeError("boom")

        with tracking(bad):
            r.get()
        with tracking(lambda: log.append("after")):
            r.get()

        with pytest.raises(RuntimeError, match="boom"):
            r.set(1)
        assert log == []
        assert r.peek() == 1  # value replaced before notifying

    def test_collect_attempts_all(self, collect_policy, caplog):
        r = ReactiveCell(0)
        log = []

        def bad():
            raise RuntimeError("boom")

        def worse():
            raise KeyError("missing")

        for sub in (bad, lambda: log.append("ok"), worse):
            with tracking(sub):
                r.get()

        with caplog.at_level(logging.ERROR, logger="cellfx.reactive"):
            with pytest.raises(NotificationError) as excinfo:
                r.set(1)

        assert log == ["ok"]
        errors = excinfo.value.exceptions
        assert [type(e) for e in errors] == [RuntimeError, KeyError]
        assert len([rec for rec in caplog.records if rec.levelno == logging.ERROR]) == 2

    def test_collect_without_failures(self, collect_policy):
        r = ReactiveCell(0)
        log = []
        with tracking(lambda: log.append(r.peek())):
            r.get()
        r.set(3)
        assert log == [3]
