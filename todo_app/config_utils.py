from __future__ import annotations

import os
from typing import Iterable, Optional


def env_str(name: str, default: str, *, strip: bool = True) -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip() if strip else value


def env_optional_str(name: str, default: Optional[str] = None, *, strip: bool = True) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip() if strip else value
    return value or default


def env_int(name: str, default: int, *, minimum: Optional[int] = None) -> int:
    raw = os.environ.get(name)
    if raw is None:
        value = default
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = default
    if minimum is not None:
        value = max(minimum, value)
    return value


def env_choice(name: str, default: str, choices: Iterable[str]) -> str:
    """Lower-cased env value if it is one of ``choices``, else ``default``."""
    allowed = {c.lower() for c in choices}
    raw = (os.environ.get(name) or "").strip().lower()
    return raw if raw in allowed else default
