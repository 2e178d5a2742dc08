"""Paywall policy — conditions, price sources, elements and their loader."""

from paywall.policy.collection import NotPaywalled, PaywallConfig, PaywallDecision
from paywall.policy.conditions import HasRegexPath, MatchesCssSelector, PaywallCondition
from paywall.policy.element import (
    ConditionsNotMet,
    PaywallElement,
    PaywallPriceOption,
    Price,
    PriceParsingError,
)
from paywall.policy.loader import (
    PolicyLoadError,
    load_policy,
    load_policy_str,
    parse_condition,
    parse_price_source,
)
from paywall.policy.price_source import FromHtmlAttribute, Hard, PriceSource

__all__ = [
    "ConditionsNotMet",
    "FromHtmlAttribute",
    "Hard",
    "HasRegexPath",
    "MatchesCssSelector",
    "NotPaywalled",
    "PaywallCondition",
    "PaywallConfig",
    "PaywallDecision",
    "PaywallElement",
    "PaywallPriceOption",
    "Price",
    "PriceParsingError",
    "PriceSource",
    "PolicyLoadError",
    "load_policy",
    "load_policy_str",
    "parse_condition",
    "parse_price_source",
]
