"""Helpers for locating the code that called into the tracker."""

from __future__ import annotations

import sys
from typing import NamedTuple


class CallSite(NamedTuple):
    """Source file and line number of a call."""

    source: str
    position: int


def caller_location(stacklevel: int = 1) -> CallSite:
    """Return the call site ``stacklevel`` frames above the caller of this function.

    ``stacklevel=1`` is the code that called the function invoking
    ``caller_location``, matching the convention of :func:`warnings.warn`.
    """

    if stacklevel < 1:
        raise ValueError("stacklevel must be >= 1")
    # +1 skips this helper's own frame.
    frame = sys._getframe(stacklevel + 1)
    return CallSite(frame.f_code.co_filename, frame.f_lineno)
