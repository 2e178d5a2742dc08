"""Documents a paywall policy is evaluated against.

A :class:`RequestableDoc` is one representation of the requested resource.
Each representation is its own subclass.  Conditions and price sources that
need HTML treat every other kind as "no match" rather than an error, so a new
representation can be added without breaking existing policies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from bs4 import BeautifulSoup, Tag

from paywall.config import settings
from paywall.documents.url_path import UrlPath, UrlPathError

logger = logging.getLogger(__name__)


class HtmlParseError(ValueError):
    """Raised when an HTML string does not yield a usable element tree."""


def _make_soup(markup: str, parser: str) -> BeautifulSoup:
    # Keep ``class`` and friends as plain strings instead of token lists.
    options: dict[str, Any] = {"multi_valued_attributes": None}
    if parser == "html.parser":
        # A repeated attribute keeps its first value, as html5lib and lxml do.
        options["on_duplicate_attribute"] = "ignore"
    return BeautifulSoup(markup, parser, **options)


class RequestableDoc:
    """Base class for every document representation."""

    @staticmethod
    def from_html(html: str, parser: Optional[str] = None) -> "HtmlNode":
        """Parse *html* and keep its first top-level element.

        Any further top-level siblings are discarded.  The kept element is
        detached and re-rooted in a fresh soup so that selectors can match
        the element itself as well as its descendants.

        Raises:
            HtmlParseError: If the markup contains no element at top level.
        """
        parser = parser or settings.html_parser
        parsed = _make_soup(html, parser)

        first = next((child for child in parsed.children if isinstance(child, Tag)), None)
        if first is None:
            raise HtmlParseError("Cannot parse HTML: document contains no elements")

        tree = _make_soup("", parser)
        tree.append(first.extract())
        logger.debug("Parsed HTML document with root <%s>", first.name)
        return HtmlNode(tree)

    @staticmethod
    def from_text(text: str) -> "PlainTextDoc":
        return PlainTextDoc(text)


@dataclass(frozen=True, eq=False)
class HtmlNode(RequestableDoc):
    """A parsed HTML element tree.

    The tree is owned by this wrapper and must be treated as read-only.
    """

    tree: BeautifulSoup

    @property
    def root(self) -> Tag:
        """The element the document was built from."""
        return next(child for child in self.tree.children if isinstance(child, Tag))


@dataclass(frozen=True)
class PlainTextDoc(RequestableDoc):
    """A document with no markup."""

    text: str


class DocumentAndPathError(ValueError):
    """Raised when building a :class:`DocumentAndPath` from raw inputs fails.

    Carries every underlying failure: when both the HTML and the path are
    invalid, both errors are kept.  An input that was valid leaves its slot
    as ``None``.
    """

    def __init__(
        self,
        html_error: Optional[HtmlParseError] = None,
        path_error: Optional[UrlPathError] = None,
    ) -> None:
        self.html_error = html_error
        self.path_error = path_error
        messages = [str(e) for e in (html_error, path_error) if e is not None]
        super().__init__("; ".join(messages))


@dataclass(frozen=True)
class DocumentAndPath:
    """The unit of evaluation: a document paired with its request path."""

    document: RequestableDoc
    url_path: UrlPath

    @classmethod
    def from_doc_and_path_str(cls, document: RequestableDoc, path: str) -> DocumentAndPath:
        """Pair an existing document with a raw path.

        Raises:
            UrlPathError: If *path* is not a valid URL path.
        """
        return cls(document, UrlPath(path))

    @classmethod
    def from_html_and_path_str(
        cls,
        html: str,
        path: str,
        parser: Optional[str] = None,
    ) -> DocumentAndPath:
        """Parse *html* and validate *path*, reporting both failures together.

        Raises:
            DocumentAndPathError: If either input (or both) is invalid.
        """
        document: Optional[HtmlNode] = None
        url_path: Optional[UrlPath] = None
        html_error: Optional[HtmlParseError] = None
        path_error: Optional[UrlPathError] = None

        try:
            document = RequestableDoc.from_html(html, parser=parser)
        except HtmlParseError as exc:
            html_error = exc

        try:
            url_path = UrlPath(path)
        except UrlPathError as exc:
            path_error = exc

        if html_error is not None or path_error is not None:
            raise DocumentAndPathError(html_error=html_error, path_error=path_error)

        return cls(document, url_path)  # type: ignore[arg-type]

    @property
    def url_path_str(self) -> str:
        return self.url_path.get_path()
