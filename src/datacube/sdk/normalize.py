"""
Text normalization for flow names.

Two projections are derived from free-text names:

- a *key* (``normalize_key``) used to compare provider and team names,
- a *label* (``labelize``) used as the attribute name a caller types.

Identifier matching in the resolver uses the looser ``fold_identifier`` on
top of these, so ``_`` and ``-`` are interchangeable in typed identifiers.
All functions are pure and idempotent.
"""

from __future__ import annotations

import re
import unicodedata

__all__ = ["fold_identifier", "labelize", "normalize_key", "strip_accents"]

_NON_KEY = re.compile(r"[^a-z0-9]")
_NON_LABEL = re.compile(r"[^a-zA-Z0-9 ]")
_WHITESPACE = re.compile(r"\s+")


def strip_accents(text: str) -> str:
    """Decompose ``text`` (NFD) and drop combining marks."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_key(name: str | None) -> str | None:
    """
    Map a display name to a comparison key.

    Parameters
    ----------
    name : str | None
        Provider or team name as shown to users.

    Returns
    -------
    str | None
        Lowercase ASCII key containing only ``[a-z0-9]`` (possibly empty), or
        ``None`` when the input is ``None``.

    Examples
    --------
    >>> normalize_key("Consultas de Veículos")
    'consultasdeveiculos'
    """
    if name is None:
        return None
    return _NON_KEY.sub("", strip_accents(name).lower())


def labelize(name: str | None) -> str | None:
    """
    Map a display name to a camel-case label.

    Accents are stripped, anything that is not alphanumeric or a space is
    dropped, and the remaining words are joined as ``firstSecondThird``.
    A name with nothing left after stripping yields ``""``.

    Examples
    --------
    >>> labelize("Consulta Cnh Paraná Completa")
    'consultaCnhParanaCompleta'
    """
    if name is None:
        return None
    cleaned = _NON_LABEL.sub("", strip_accents(name)).strip()
    if not cleaned:
        return ""
    parts = _WHITESPACE.split(cleaned)
    head, tail = parts[0].lower(), parts[1:]
    return head + "".join(p.lower().capitalize() for p in tail)


def fold_identifier(value: str | None) -> str | None:
    """Lowercase and fold ``_`` to ``-`` for identifier comparison."""
    if value is None:
        return None
    return value.lower().replace("_", "-")
