"""The full paywall policy: an ordered list of elements.

Declaration order is significant.  :meth:`PaywallConfig.evaluate` walks the
elements in order and the first one whose conditions hold decides the
outcome; later elements are not evaluated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from paywall.documents import DocumentAndPath
from paywall.policy.element import (
    ConditionsNotMet,
    PaywallElement,
    PaywallPriceOption,
    Price,
    PriceParsingError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotPaywalled:
    """No element applied to the request."""


@dataclass(frozen=True)
class PaywallDecision:
    """The outcome of a whole policy for one request.

    ``element_index`` is the position of the deciding element, or ``None``
    when nothing matched.
    """

    outcome: Union[Price, PriceParsingError, NotPaywalled]
    element_index: Optional[int] = None

    @property
    def is_paywalled(self) -> bool:
        return not isinstance(self.outcome, NotPaywalled)


@dataclass(frozen=True)
class PaywallConfig:
    elements: Tuple[PaywallElement, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))

    @classmethod
    def from_elements(cls, elements: Iterable[PaywallElement]) -> PaywallConfig:
        return cls(tuple(elements))

    def __iter__(self) -> Iterator[PaywallElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def evaluate(self, doc_and_path: DocumentAndPath) -> PaywallDecision:
        """Return the outcome of the first element whose conditions hold."""
        for index, element in enumerate(self.elements):
            option = element.evaluate(doc_and_path)
            if isinstance(option, ConditionsNotMet):
                continue
            logger.debug("Element #%d decided %s: %s", index, doc_and_path.url_path, option)
            return PaywallDecision(outcome=option, element_index=index)

        logger.debug("No element applies to %s", doc_and_path.url_path)
        return PaywallDecision(outcome=NotPaywalled())

    def evaluate_all(self, doc_and_path: DocumentAndPath) -> List[PaywallPriceOption]:
        """Evaluate every element independently, in declared order."""
        return [element.evaluate(doc_and_path) for element in self.elements]
