"""Tests for the YAML policy loader and the tagged value grammar."""

from __future__ import annotations

from pathlib import Path

import pytest

from paywall.config import settings
from paywall.documents import DocumentAndPath
from paywall.money import Currency
from paywall.policy import (
    ConditionsNotMet,
    FromHtmlAttribute,
    Hard,
    HasRegexPath,
    MatchesCssSelector,
    PaywallConfig,
    PolicyLoadError,
    Price,
    PriceParsingError,
    load_policy,
    load_policy_str,
    parse_condition,
    parse_price_source,
)

_POLICY_YAML = """\
version: 1
paths:
  - paywall_conditions:
      - !HasRegexPath "^/premium/.*$"
    price_source: !Hard $1.25
  - paywall_conditions:
      - !MatchesCssSelector "article.locked"
    price_source: !FromHtmlAttribute div#test:::data-price
"""


# ---------------------------------------------------------------------------
# Tag grammar without YAML
# ---------------------------------------------------------------------------

class TestParseTags:
    def test_regex_condition(self) -> None:
        condition = parse_condition("HasRegexPath", "^/premium/")
        assert isinstance(condition, HasRegexPath)
        assert condition.regex.pattern == "^/premium/"

    def test_css_condition(self) -> None:
        condition = parse_condition("MatchesCssSelector", "body")
        assert isinstance(condition, MatchesCssSelector)

    def test_hard_price(self) -> None:
        source = parse_price_source("Hard", "$1.25")
        assert source == Hard(Currency.parse("$1.25"))

    def test_html_attribute_price(self) -> None:
        source = parse_price_source("FromHtmlAttribute", "div#test:::data-price")
        assert isinstance(source, FromHtmlAttribute)
        assert source.selector.attribute_name == "data-price"

    def test_unknown_tag(self) -> None:
        with pytest.raises(PolicyLoadError, match="Unknown paywall condition"):
            parse_condition("Hard", "$1")

    @pytest.mark.parametrize(
        ("tag", "payload"),
        [("Hard", "one dollar"), ("FromHtmlAttribute", "div#test:data-price")],
    )
    def test_bad_price_payload(self, tag: str, payload: str) -> None:
        with pytest.raises(PolicyLoadError, match=tag):
            parse_price_source(tag, payload)

    def test_bad_regex(self) -> None:
        with pytest.raises(PolicyLoadError, match="HasRegexPath"):
            parse_condition("HasRegexPath", "(")


# ---------------------------------------------------------------------------
# load_policy_str
# ---------------------------------------------------------------------------

class TestLoadPolicyStr:
    def test_loads_elements_in_order(self) -> None:
        policy = load_policy_str(_POLICY_YAML)

        assert isinstance(policy, PaywallConfig)
        assert len(policy) == 2
        first, second = policy.elements
        assert isinstance(first.paywall_conditions[0], HasRegexPath)
        assert first.price_source == Hard(Currency.parse("$1.25"))
        assert isinstance(second.paywall_conditions[0], MatchesCssSelector)
        assert isinstance(second.price_source, FromHtmlAttribute)

    def test_loaded_policy_evaluates(self) -> None:
        policy = load_policy_str(_POLICY_YAML)
        page = '<html><body><article class="locked"></article></body></html>'

        premium = policy.evaluate(DocumentAndPath.from_html_and_path_str(page, "/premium/test"))
        assert premium.outcome == Price(Currency.parse("$1.25"))

        locked = policy.evaluate(DocumentAndPath.from_html_and_path_str(page, "/free/test"))
        assert isinstance(locked.outcome, PriceParsingError)
        assert locked.element_index == 1

    def test_conditions_may_be_omitted(self) -> None:
        policy = load_policy_str("paths:\n  - price_source: !Hard $2\n")
        element = policy.elements[0]
        assert element.paywall_conditions == ()
        request = DocumentAndPath.from_html_and_path_str("<p></p>", "/x")
        assert element.evaluate(request) != ConditionsNotMet()

    def test_null_conditions_are_empty(self) -> None:
        policy = load_policy_str("paths:\n  - paywall_conditions:\n    price_source: !Hard $2\n")
        assert policy.elements[0].paywall_conditions == ()

    def test_version_is_optional(self) -> None:
        assert len(load_policy_str("paths: []\n")) == 0

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "paths: [",
            "version: 2\npaths: []\n",
            "paths:\n  - price_source: !Soft $1\n",
            "paths:\n  - paywall_conditions: [!HasRegexPath '(']\n    price_source: !Hard $1\n",
            "paths:\n  - price_source: !Hard free\n",
            "paths:\n  - price_source: !FromHtmlAttribute 'div:data-price'\n",
            "paths:\n  - paywall_conditions: []\n",
            "paths:\n  - price_source: !Hard $1\n    priority: 3\n",
            "paths:\n  - paywall_conditions: ['^/premium/']\n    price_source: !Hard $1\n",
            "paths:\n  - price_source: !HasRegexPath '^/premium/'\n",
            "paths:\n  - price_source: '$1'\n",
            "paths:\n  - price_source: !Hard [1, 2]\n",
            "elements: []\n",
            "- price_source: !Hard $1\n",
        ],
    )
    def test_invalid_documents(self, text: str) -> None:
        with pytest.raises(PolicyLoadError):
            load_policy_str(text)

    def test_error_mentions_bad_payload(self) -> None:
        with pytest.raises(PolicyLoadError, match="one dollar"):
            load_policy_str("paths:\n  - price_source: !Hard one dollar\n")


# ---------------------------------------------------------------------------
# load_policy
# ---------------------------------------------------------------------------

class TestLoadPolicy:
    def test_loads_file(self, tmp_path: Path) -> None:
        policy_file = tmp_path / "paywall.yaml"
        policy_file.write_text(_POLICY_YAML, encoding="utf-8")
        assert len(load_policy(policy_file)) == 2

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        policy_file = tmp_path / "paywall.yaml"
        policy_file.write_text(_POLICY_YAML, encoding="utf-8")
        assert len(load_policy(str(policy_file))) == 2

    def test_defaults_to_settings_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        policy_file = tmp_path / "configured.yaml"
        policy_file.write_text(_POLICY_YAML, encoding="utf-8")
        monkeypatch.setattr(settings, "policy_path", policy_file)
        assert len(load_policy()) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_policy(tmp_path / "nope.yaml")
