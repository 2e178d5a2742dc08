"""A single paywall rule and the outcome of evaluating it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Tuple, Union

from paywall.documents import DocumentAndPath
from paywall.money import Currency
from paywall.policy.conditions import PaywallCondition
from paywall.policy.price_source import PriceSource
from paywall.utils import HtmlAttributeSelectorError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Price:
    """The element applies and its price resolved."""

    amount: Currency


@dataclass(frozen=True)
class ConditionsNotMet:
    """At least one of the element's conditions was false."""


@dataclass(frozen=True)
class PriceParsingError:
    """The element applies but its price could not be resolved.

    Only the message of the underlying error is kept.
    """

    message: str


PaywallPriceOption = Union[Price, ConditionsNotMet, PriceParsingError]


# ---------------------------------------------------------------------------
# Element
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PaywallElement:
    """Conditions (all must hold) plus the price charged when they do.

    An element with no conditions always applies.
    """

    price_source: PriceSource
    paywall_conditions: Tuple[PaywallCondition, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "paywall_conditions", tuple(self.paywall_conditions))

    def applies_to(self, doc_and_path: DocumentAndPath) -> bool:
        return all(condition.evaluate(doc_and_path) for condition in self.paywall_conditions)

    def evaluate(self, doc_and_path: DocumentAndPath) -> PaywallPriceOption:
        """Evaluate the conditions, then (only if they all hold) the price.

        The price source is never consulted when a condition fails.
        """
        if not self.applies_to(doc_and_path):
            return ConditionsNotMet()

        try:
            amount = self.price_source.resolve(doc_and_path)
        except HtmlAttributeSelectorError as exc:
            logger.debug("Price for %s could not be resolved: %s", doc_and_path.url_path, exc)
            return PriceParsingError(str(exc))
        return Price(amount)
