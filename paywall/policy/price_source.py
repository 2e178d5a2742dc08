"""Rules for computing the price of a request once an element applies."""

from __future__ import annotations

from dataclasses import dataclass

from paywall.documents import DocumentAndPath, HtmlNode
from paywall.money import Currency
from paywall.utils import ElementNotFound, HtmlAttributeSelector


class PriceSource:
    """Base class for every price source kind."""

    def resolve(self, doc_and_path: DocumentAndPath) -> Currency:
        """Return the price for *doc_and_path*.

        Raises:
            paywall.utils.HtmlAttributeSelectorError: If a data-dependent
                source cannot read its price from the document.
        """
        raise NotImplementedError


@dataclass(frozen=True)
class Hard(PriceSource):
    """A fixed price; the document is never looked at."""

    amount: Currency

    @classmethod
    def from_literal(cls, literal: str) -> Hard:
        return cls(Currency.parse(literal))

    def resolve(self, doc_and_path: DocumentAndPath) -> Currency:
        return self.amount

    def __str__(self) -> str:
        return f"!Hard {self.amount}"


@dataclass(frozen=True)
class FromHtmlAttribute(PriceSource):
    """Read the price from an attribute of the requested HTML document.

    Non-HTML documents have no elements, so they resolve to
    :class:`~paywall.utils.ElementNotFound`.
    """

    selector: HtmlAttributeSelector

    @classmethod
    def from_string(cls, text: str) -> FromHtmlAttribute:
        return cls(HtmlAttributeSelector.parse(text))

    def resolve(self, doc_and_path: DocumentAndPath) -> Currency:
        document = doc_and_path.document
        if not isinstance(document, HtmlNode):
            raise ElementNotFound(self.selector.html_selector.pattern)
        return self.selector.get_attribute(document.tree, into=Currency)

    def __str__(self) -> str:
        return f"!FromHtmlAttribute {str(self.selector)!r}"
