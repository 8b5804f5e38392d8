"""Streamlit implementations of the notification and celebration ports."""

from __future__ import annotations

import streamlit as st

_TOAST_ICONS = {
    "info": "✅",
    "warning": "⚠️",
    "error": "❌",
}


class ToastNotificationSink:
    def notify(self, message: str, *, level: str = "info") -> None:
        st.toast(message, icon=_TOAST_ICONS.get(level, _TOAST_ICONS["info"]))


class StreamlitCelebration:
    """Fires ``st.balloons`` (default) or ``st.snow``."""

    def __init__(self, effect: str = "balloons") -> None:
        if effect not in ("balloons", "snow"):
            raise ValueError(f"Unknown celebration effect: {effect!r}")
        self.effect = effect

    def celebrate(self) -> None:
        if self.effect == "snow":
            st.snow()
        else:
            st.balloons()
