"""Locate an element by CSS selector and read one of its attributes.

Selectors are written in a compact one-string form::

    <css-selector>:::<attribute-name>

e.g. ``div#article:::data-price``.  The string is split on the *first*
``:::``; everything after it is the attribute name, taken literally and
matched case-sensitively.  Note that the default ``html.parser`` lowercases
attribute names while parsing, so a name with uppercase letters never
matches; :meth:`HtmlAttributeSelector.parse` logs a warning for those.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Type, TypeVar

from bs4 import Tag

from paywall.utils.css_selector import CssSelector

logger = logging.getLogger(__name__)

T = TypeVar("T")

DELIMITER = ":::"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class HtmlAttributeSelectorFormatError(ValueError):
    """Raised when a selector string is not ``<css-selector>:::<attribute>``."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(
            f"Invalid HTML attribute selector {text!r}: "
            f"expected the format 'html_selector{DELIMITER}attribute_name'"
        )


class HtmlAttributeSelectorError(Exception):
    """Base class for failures while reading an attribute from a document."""


class ElementNotFound(HtmlAttributeSelectorError):
    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(f"No HTML element found matching the selector {selector!r}")


class AttributeNotFound(HtmlAttributeSelectorError):
    def __init__(self, attribute_name: str) -> None:
        self.attribute_name = attribute_name
        super().__init__(f"Attribute {attribute_name!r} not found on the selected element")


class ConversionError(HtmlAttributeSelectorError):
    def __init__(self, value: str, target_type: str) -> None:
        self.value = value
        self.target_type = target_type
        super().__init__(f"Failed to convert attribute value {value!r} to type {target_type}")


# ---------------------------------------------------------------------------
# Selector
# ---------------------------------------------------------------------------

def _parser_for(target_type: Type[Any]) -> Callable[[str], Any]:
    """Return the canonical text parser for *target_type*.

    Types with a ``parse`` classmethod (e.g. :class:`paywall.money.Currency`)
    use it; everything else is called with the string (``int``, ``Decimal``).
    """
    return getattr(target_type, "parse", target_type)


@dataclass(frozen=True)
class HtmlAttributeSelector:
    """A CSS selector plus the name of the attribute to read.

    Stateless and reusable across any number of documents.
    """

    html_selector: CssSelector
    attribute_name: str

    @classmethod
    def parse(cls, text: str) -> HtmlAttributeSelector:
        """Build a selector from ``"<css-selector>:::<attribute-name>"``.

        Raises:
            HtmlAttributeSelectorFormatError: If *text* has no ``:::``.
        """
        parts = text.split(DELIMITER, 1)
        if len(parts) != 2:
            raise HtmlAttributeSelectorFormatError(text)
        css, attribute_name = parts
        if attribute_name != attribute_name.lower():
            logger.warning(
                "Attribute name %r has uppercase letters; HTML parsers lowercase "
                "attribute names, so it will likely never be found",
                attribute_name,
            )
        return cls(html_selector=CssSelector(css), attribute_name=attribute_name)

    def get_attribute(self, tree: Tag, into: Type[T] = str) -> T:  # type: ignore[assignment]
        """Read the attribute from the first matching element of *tree*.

        Lookups happen in a fixed order and the first failure wins:

        1. no element matches the selector → :class:`ElementNotFound`
        2. the element lacks the attribute (exact, case-sensitive name)
           → :class:`AttributeNotFound`
        3. the value cannot be parsed as *into* → :class:`ConversionError`
        """
        element = self.html_selector.select_one(tree)
        if element is None:
            raise ElementNotFound(self.html_selector.pattern)

        raw = next(
            (value for name, value in element.attrs.items() if name == self.attribute_name),
            None,
        )
        if raw is None:
            raise AttributeNotFound(self.attribute_name)

        value = raw if isinstance(raw, str) else " ".join(raw)
        try:
            return _parser_for(into)(value)
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise ConversionError(
                value, getattr(into, "__name__", repr(into))
            ) from exc

    def __str__(self) -> str:
        return f"{self.html_selector.pattern}{DELIMITER}{self.attribute_name}"
