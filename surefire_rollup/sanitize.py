"""Fold nested test classes into the class that owns the source file.

Surefire reports one entry per class, including inner classes such as
``Outer$Inner``, while measures are attributed per source file.  Every nested
identity is resolved straight to its top-level ancestor so the result does not
depend on the order in which identities are visited.
"""
from __future__ import annotations

from typing import Dict, Iterable

from .index import TestIndex

DEFAULT_SEPARATOR = "$"


def parent_identity(identity: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return the top-level class identity for *identity*.

    ``a.B$C$D`` maps to ``a.B``.  Identities without the separator, or with
    nothing in front of it, are returned unchanged.
    """
    head, sep, _ = identity.partition(separator)
    if not sep or not head:
        return identity
    return head


def nesting_plan(
    identities: Iterable[str], separator: str = DEFAULT_SEPARATOR
) -> Dict[str, str]:
    """Map every nested identity in *identities* to its top-level parent.

    Top-level identities are not part of the result, so the plan of an
    already folded index is empty.
    """
    plan: Dict[str, str] = {}
    for identity in sorted(identities):
        parent = parent_identity(identity, separator)
        if parent != identity:
            plan[identity] = parent
    return plan


def sanitize(index: TestIndex, separator: str = DEFAULT_SEPARATOR) -> TestIndex:
    """Merge nested identities of *index* into their parents, in place."""
    for nested, parent in nesting_plan(index.class_identities(), separator).items():
        index.merge(nested, parent)
    return index
