"""Predicates that decide whether a paywall element applies to a request."""

from __future__ import annotations

import re
from dataclasses import dataclass

from paywall.documents import DocumentAndPath, HtmlNode
from paywall.utils import CssSelector


class PaywallCondition:
    """Base class for every condition kind."""

    def evaluate(self, doc_and_path: DocumentAndPath) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class HasRegexPath(PaywallCondition):
    """True when the regex is found *anywhere* in the request path.

    Matching is a substring search; anchor with ``^`` / ``$`` to match the
    whole path.
    """

    regex: re.Pattern

    @classmethod
    def from_pattern(cls, pattern: str) -> HasRegexPath:
        """Compile *pattern*; raises :class:`re.error` if it is invalid."""
        return cls(re.compile(pattern))

    def evaluate(self, doc_and_path: DocumentAndPath) -> bool:
        return self.regex.search(doc_and_path.url_path_str) is not None

    def __str__(self) -> str:
        return f"!HasRegexPath {self.regex.pattern!r}"


@dataclass(frozen=True)
class MatchesCssSelector(PaywallCondition):
    """True when the document is HTML and at least one element matches.

    Any other document kind is simply not a match.
    """

    selector: CssSelector

    @classmethod
    def from_pattern(cls, pattern: str) -> MatchesCssSelector:
        return cls(CssSelector(pattern))

    def evaluate(self, doc_and_path: DocumentAndPath) -> bool:
        document = doc_and_path.document
        if not isinstance(document, HtmlNode):
            return False
        return self.selector.select_one(document.tree) is not None

    def __str__(self) -> str:
        return f"!MatchesCssSelector {self.selector.pattern!r}"
