"""Paywall decision engine.

Decides, for one requested document and its URL path, whether access must be
paid for and at what price, driven by a declarative YAML policy::

    from paywall import DocumentAndPath, load_policy

    policy = load_policy("paywall.yaml")
    request = DocumentAndPath.from_html_and_path_str(html, "/premium/story")
    decision = policy.evaluate(request)
"""

from paywall.documents import DocumentAndPath, RequestableDoc, UrlPath
from paywall.money import Currency
from paywall.policy import PaywallConfig, PaywallElement, load_policy, load_policy_str

__all__ = [
    "Currency",
    "DocumentAndPath",
    "PaywallConfig",
    "PaywallElement",
    "RequestableDoc",
    "UrlPath",
    "load_policy",
    "load_policy_str",
]
