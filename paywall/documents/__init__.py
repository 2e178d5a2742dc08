"""Request documents and paths — the inputs a policy is evaluated against."""

from paywall.documents.requestable_doc import (
    DocumentAndPath,
    DocumentAndPathError,
    HtmlNode,
    HtmlParseError,
    PlainTextDoc,
    RequestableDoc,
)
from paywall.documents.url_path import UrlPath, UrlPathError

__all__ = [
    "DocumentAndPath",
    "DocumentAndPathError",
    "HtmlNode",
    "HtmlParseError",
    "PlainTextDoc",
    "RequestableDoc",
    "UrlPath",
    "UrlPathError",
]
