"""Document helpers shared by conditions and price sources."""

from paywall.utils.css_selector import CssSelector
from paywall.utils.html_attribute_selector import (
    AttributeNotFound,
    ConversionError,
    ElementNotFound,
    HtmlAttributeSelector,
    HtmlAttributeSelectorError,
    HtmlAttributeSelectorFormatError,
)

__all__ = [
    "AttributeNotFound",
    "ConversionError",
    "CssSelector",
    "ElementNotFound",
    "HtmlAttributeSelector",
    "HtmlAttributeSelectorError",
    "HtmlAttributeSelectorFormatError",
]
