"""
Module name normalization.
"""

from __future__ import annotations

import posixpath


def normalize(name: str, referrer_name: str | None = None) -> str:
    """
    Return the canonical name for ``name`` as seen from ``referrer_name``.

    Relative names (``./x``, ``../x``) are resolved against the referrer's
    directory. Separators become forward slashes and ``.``/``..`` segments are
    collapsed; a leading ``..`` that cannot be collapsed is kept.
    """
    name = name.replace("\\", "/")
    if referrer_name and (name.startswith("./") or name.startswith("../")):
        name = posixpath.join(posixpath.dirname(referrer_name.replace("\\", "/")), name)
    normalized = posixpath.normpath(name)
    return "" if normalized == "." else normalized
