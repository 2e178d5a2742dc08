"""Validated request path value object."""

from __future__ import annotations

from dataclasses import dataclass


class UrlPathError(ValueError):
    """Raised when a raw string is not a valid URL path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Invalid URL path format: {path!r}")


@dataclass(frozen=True)
class UrlPath:
    """A request path that starts with ``/`` and has no query or fragment.

    The path is stored verbatim: no trailing-slash collapsing and no
    percent-decoding.  Construction raises :class:`UrlPathError` for anything
    else, including the empty string.
    """

    path: str

    def __post_init__(self) -> None:
        if not self.path.startswith("/") or "?" in self.path or "#" in self.path:
            raise UrlPathError(self.path)

    def get_path(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path
