"""Tests for request documents — UrlPath, RequestableDoc and DocumentAndPath."""

from __future__ import annotations

import pytest

from paywall.documents import (
    DocumentAndPath,
    DocumentAndPathError,
    HtmlNode,
    HtmlParseError,
    PlainTextDoc,
    RequestableDoc,
    UrlPath,
    UrlPathError,
)

_SIMPLE_HTML = "<html><head></head><body><div id=\"test\"></div></body></html>"


# ---------------------------------------------------------------------------
# UrlPath
# ---------------------------------------------------------------------------

class TestUrlPath:
    @pytest.mark.parametrize("path", ["/", "/articles/123", "/a/b/c-d_e.f", "/trailing/", "/%20x"])
    def test_valid_paths_round_trip_unchanged(self, path: str) -> None:
        assert UrlPath(path).get_path() == path

    @pytest.mark.parametrize(
        "path",
        ["", "articles/123", "/articles/123?query=param", "/articles/123#section", "?", "#"],
    )
    def test_invalid_paths_are_rejected(self, path: str) -> None:
        with pytest.raises(UrlPathError) as exc_info:
            UrlPath(path)
        assert exc_info.value.path == path

    def test_is_immutable(self) -> None:
        url_path = UrlPath("/a")
        with pytest.raises(AttributeError):
            url_path.path = "/b"  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        assert UrlPath("/a") == UrlPath("/a")
        assert UrlPath("/a") != UrlPath("/a/")

    def test_str_is_the_path(self) -> None:
        assert str(UrlPath("/premium/x")) == "/premium/x"


# ---------------------------------------------------------------------------
# RequestableDoc
# ---------------------------------------------------------------------------

class TestRequestableDoc:
    def test_from_html_keeps_root_element(self) -> None:
        doc = RequestableDoc.from_html(_SIMPLE_HTML)
        assert isinstance(doc, HtmlNode)
        assert doc.root.name == "html"

    def test_doctype_is_skipped(self) -> None:
        doc = RequestableDoc.from_html("<!DOCTYPE html>\n<html><body></body></html>")
        assert doc.root.name == "html"

    def test_only_first_top_level_element_is_kept(self) -> None:
        doc = RequestableDoc.from_html('<p class="first">one</p><p class="second">two</p>')
        assert doc.root.get("class") == "first"
        assert doc.tree.select_one("p.second") is None

    def test_root_itself_is_selectable(self) -> None:
        doc = RequestableDoc.from_html('<div id="test"></div>')
        assert doc.tree.select_one("div#test") is not None

    @pytest.mark.parametrize("html", ["", "   ", "just some text", "<!-- only a comment -->"])
    def test_markup_without_elements_is_a_parse_error(self, html: str) -> None:
        with pytest.raises(HtmlParseError):
            RequestableDoc.from_html(html)

    def test_from_text(self) -> None:
        doc = RequestableDoc.from_text("hello")
        assert isinstance(doc, PlainTextDoc)
        assert doc.text == "hello"


# ---------------------------------------------------------------------------
# DocumentAndPath
# ---------------------------------------------------------------------------

class TestDocumentAndPath:
    def test_from_parts(self) -> None:
        doc = RequestableDoc.from_html(_SIMPLE_HTML)
        doc_and_path = DocumentAndPath(doc, UrlPath("/test/test"))
        assert doc_and_path.document is doc
        assert doc_and_path.url_path_str == "/test/test"

    def test_from_doc_and_path_str(self) -> None:
        doc = RequestableDoc.from_html(_SIMPLE_HTML)
        doc_and_path = DocumentAndPath.from_doc_and_path_str(doc, "/test/test")
        assert doc_and_path.url_path == UrlPath("/test/test")

    def test_from_doc_and_path_str_invalid_path(self) -> None:
        doc = RequestableDoc.from_html(_SIMPLE_HTML)
        with pytest.raises(UrlPathError):
            DocumentAndPath.from_doc_and_path_str(doc, "test/test")

    def test_from_html_and_path_str(self) -> None:
        doc_and_path = DocumentAndPath.from_html_and_path_str(_SIMPLE_HTML, "/premium/a")
        assert isinstance(doc_and_path.document, HtmlNode)
        assert doc_and_path.url_path_str == "/premium/a"

    def test_both_inputs_invalid_reports_both_errors(self) -> None:
        with pytest.raises(DocumentAndPathError) as exc_info:
            DocumentAndPath.from_html_and_path_str("", "no-slash")

        err = exc_info.value
        assert isinstance(err.html_error, HtmlParseError)
        assert isinstance(err.path_error, UrlPathError)
        assert str(err.html_error) in str(err)
        assert str(err.path_error) in str(err)

    def test_only_path_invalid(self) -> None:
        with pytest.raises(DocumentAndPathError) as exc_info:
            DocumentAndPath.from_html_and_path_str(_SIMPLE_HTML, "/a?b=c")

        assert exc_info.value.html_error is None
        assert isinstance(exc_info.value.path_error, UrlPathError)
        assert str(exc_info.value) == str(exc_info.value.path_error)

    def test_only_html_invalid(self) -> None:
        with pytest.raises(DocumentAndPathError) as exc_info:
            DocumentAndPath.from_html_and_path_str("plain text", "/fine")

        assert isinstance(exc_info.value.html_error, HtmlParseError)
        assert exc_info.value.path_error is None
        assert str(exc_info.value) == str(exc_info.value.html_error)

    def test_is_immutable(self) -> None:
        doc_and_path = DocumentAndPath.from_html_and_path_str(_SIMPLE_HTML, "/a")
        with pytest.raises(AttributeError):
            doc_and_path.url_path = UrlPath("/b")  # type: ignore[misc]
