"""Load a paywall policy from YAML.

Policy files look like::

    version: 1
    paths:
      - paywall_conditions:
          - !HasRegexPath "^/premium/"
          - !MatchesCssSelector "article.locked"
        price_source: !Hard $1.25
      - price_source: !FromHtmlAttribute "meta[name=price]:::content"

Each tag's payload grammar lives in a plain parse function
(:func:`parse_condition`, :func:`parse_price_source`) so it can be used and
tested without YAML.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Callable, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from paywall.config import settings
from paywall.policy.collection import PaywallConfig
from paywall.policy.conditions import HasRegexPath, MatchesCssSelector, PaywallCondition
from paywall.policy.element import PaywallElement
from paywall.policy.price_source import FromHtmlAttribute, Hard, PriceSource

logger = logging.getLogger(__name__)

CONDITION_TAGS: dict[str, Callable[[str], PaywallCondition]] = {
    "HasRegexPath": HasRegexPath.from_pattern,
    "MatchesCssSelector": MatchesCssSelector.from_pattern,
}

PRICE_SOURCE_TAGS: dict[str, Callable[[str], PriceSource]] = {
    "Hard": Hard.from_literal,
    "FromHtmlAttribute": FromHtmlAttribute.from_string,
}


class PolicyLoadError(ValueError):
    """Raised when a policy document cannot be decoded or validated."""


# ---------------------------------------------------------------------------
# Tagged value grammar
# ---------------------------------------------------------------------------

def _build(table: dict[str, Callable[[str], Any]], kind: str, tag: str, payload: str) -> Any:
    builder = table.get(tag)
    if builder is None:
        raise PolicyLoadError(
            f"Unknown {kind} {tag!r}; expected one of: {', '.join(sorted(table))}"
        )
    try:
        return builder(payload)
    except (ValueError, re.error) as exc:
        raise PolicyLoadError(f"Invalid {tag} value {payload!r}: {exc}") from exc


def parse_condition(tag: str, payload: str) -> PaywallCondition:
    """Build a condition from its variant name and string payload."""
    return _build(CONDITION_TAGS, "paywall condition", tag, payload)


def parse_price_source(tag: str, payload: str) -> PriceSource:
    """Build a price source from its variant name and string payload."""
    return _build(PRICE_SOURCE_TAGS, "price source", tag, payload)


class _PolicyLoader(yaml.SafeLoader):
    """SafeLoader that understands the paywall tags."""


def _tag_constructor(parse: Callable[[str, str], Any], tag: str) -> Callable[..., Any]:
    def construct(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
        payload = loader.construct_scalar(node)
        try:
            return parse(tag, str(payload))
        except PolicyLoadError as exc:
            raise yaml.constructor.ConstructorError(
                None, None, str(exc), node.start_mark
            ) from exc

    return construct


for _tag in CONDITION_TAGS:
    _PolicyLoader.add_constructor(f"!{_tag}", _tag_constructor(parse_condition, _tag))
for _tag in PRICE_SOURCE_TAGS:
    _PolicyLoader.add_constructor(f"!{_tag}", _tag_constructor(parse_price_source, _tag))


# ---------------------------------------------------------------------------
# Record schema
# ---------------------------------------------------------------------------

class PaywallElementRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    paywall_conditions: list[PaywallCondition] = Field(default_factory=list)
    price_source: PriceSource

    @field_validator("paywall_conditions", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_element(self) -> PaywallElement:
        return PaywallElement(
            price_source=self.price_source,
            paywall_conditions=tuple(self.paywall_conditions),
        )


class PolicyDocument(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    version: Literal[1] = 1
    paths: list[PaywallElementRecord] = Field(default_factory=list)

    def to_config(self) -> PaywallConfig:
        return PaywallConfig.from_elements(record.to_element() for record in self.paths)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_policy_str(text: str) -> PaywallConfig:
    """Decode and validate a policy from YAML text.

    Raises:
        PolicyLoadError: On YAML syntax errors, unknown tags, malformed tag
            payloads, or records that do not match the schema.
    """
    try:
        data = yaml.load(text, Loader=_PolicyLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        raise PolicyLoadError(f"Invalid policy document: {exc}") from exc

    if data is None:
        raise PolicyLoadError("Policy document is empty")

    try:
        document = PolicyDocument.model_validate(data)
    except ValidationError as exc:
        raise PolicyLoadError(f"Policy validation failed:\n{exc}") from exc

    return document.to_config()


def load_policy(path: Optional[Union[Path, str]] = None) -> PaywallConfig:
    """Load the policy file at *path* (defaults to ``settings.policy_path``).

    Raises:
        FileNotFoundError: If the file does not exist.
        PolicyLoadError: If its contents are not a valid policy.
    """
    policy_path = Path(path) if path is not None else settings.policy_path
    if not policy_path.exists():
        raise FileNotFoundError(f"Policy file not found: {policy_path}")

    config = load_policy_str(policy_path.read_text(encoding="utf-8"))
    logger.info("Loaded %d paywall element(s) from %s", len(config), policy_path)
    return config
