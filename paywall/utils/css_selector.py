"""Compiled CSS selectors backed by soupsieve."""

from __future__ import annotations

import logging
from typing import Optional

import soupsieve
from bs4 import Tag

logger = logging.getLogger(__name__)


class CssSelector:
    """A CSS selector compiled once and reused across documents.

    Selector text that soupsieve rejects is not an error: the selector is
    kept and simply never matches anything.
    """

    __slots__ = ("pattern", "_compiled")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        try:
            self._compiled: Optional[soupsieve.SoupSieve] = soupsieve.compile(pattern)
        except soupsieve.SelectorSyntaxError as exc:
            logger.warning("CSS selector %r is invalid and will never match: %s", pattern, exc)
            self._compiled = None

    @property
    def is_valid(self) -> bool:
        return self._compiled is not None

    def select_one(self, tree: Tag) -> Optional[Tag]:
        """Return the first element in *tree* matching this selector, if any."""
        if self._compiled is None:
            return None
        return self._compiled.select_one(tree)

    def __repr__(self) -> str:
        return f"CssSelector({self.pattern!r})"
