# This file renders registry results as the plain-text bodies returned by the names endpoints.
# Keeping the wording in one module prevents the primary and legacy routes from drifting apart.

from __future__ import annotations

from collections.abc import Sequence


def render_name_list(names: Sequence[str]) -> str:
    """Render names as a bracketed, comma-and-space separated list."""

    return "[" + ", ".join(names) + "]"


def names_sentence(names: Sequence[str]) -> str:
    """Full response line for a names listing, e.g. `Names are [tom, dick, harry]`."""

    return f"Names are {render_name_list(names)}"
