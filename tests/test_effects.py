from __future__ import annotations

import pytest

from todo_app import effects


def test_toast_sink_picks_icon_per_level(monkeypatch):
    shown = []
    monkeypatch.setattr(effects.st, "toast", lambda body, icon=None: shown.append((body, icon)))
    sink = effects.ToastNotificationSink()
    sink.notify("Task added successfully")
    sink.notify("Could not delete task", level="error")
    sink.notify("odd", level="whatever")
    assert shown == [
        ("Task added successfully", "✅"),
        ("Could not delete task", "❌"),
        ("odd", "✅"),
    ]


@pytest.mark.parametrize("effect, fired", [("balloons", "balloons"), ("snow", "snow")])
def test_celebration_effects(monkeypatch, effect, fired):
    calls = []
    monkeypatch.setattr(effects.st, "balloons", lambda: calls.append("balloons"))
    monkeypatch.setattr(effects.st, "snow", lambda: calls.append("snow"))
    effects.StreamlitCelebration(effect).celebrate()
    assert calls == [fired]


def test_unknown_celebration_is_rejected():
    with pytest.raises(ValueError):
        effects.StreamlitCelebration("fireworks")
