"""Unit tests for core/hooks.py"""

import pytest

from mdsite.core.hooks import LIFECYCLE_EVENTS, HookEvent, HookRegistry


def test_trigger_passes_object_and_args():
    hooks = HookRegistry()
    calls = []
    hooks.register("posts", "post_write", lambda obj, *args: calls.append((obj, args)))
    hooks.trigger("posts", HookEvent.post_write, "resource", 1, 2)
    assert calls == [("resource", (1, 2))]


def test_trigger_only_matching_owner():
    hooks = HookRegistry()
    calls = []
    hooks.register("pages", "post_read", calls.append)
    hooks.trigger("posts", "post_read", "x")
    assert calls == []


def test_priority_then_registration_order():
    hooks = HookRegistry()
    order = []
    hooks.register("resources", "post_read", lambda _: order.append("low"), priority="low")
    hooks.register("resources", "post_read", lambda _: order.append("normal-1"))
    hooks.register("resources", "post_read", lambda _: order.append("high"), priority="high")
    hooks.register("resources", "post_read", lambda _: order.append("normal-2"))
    hooks.trigger("resources", "post_read", None)
    assert order == ["high", "normal-1", "normal-2", "low"]


def test_register_multiple_owners():
    hooks = HookRegistry()
    calls = []
    hooks.register(["posts", "pages"], "post_init", calls.append)
    hooks.trigger("posts", "post_init", "a")
    hooks.trigger("pages", "post_init", "b")
    assert calls == ["a", "b"]


def test_unknown_event_rejected():
    with pytest.raises(ValueError):
        HookRegistry().register("posts", "post_everything", print)


def test_unknown_priority_rejected():
    with pytest.raises(ValueError):
        HookRegistry().register("posts", "post_read", print, priority="urgent")


def test_lifecycle_events_cover_every_event():
    assert {event for _, event in LIFECYCLE_EVENTS} == set(HookEvent)
    assert [phase for phase, _ in LIFECYCLE_EVENTS][0] == "init"
