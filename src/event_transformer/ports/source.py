"""Content source port for manifest and template text."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IContentSource(Protocol):
    """
    Protocol for fetching text files by path.

    Implementations: LocalContentSource, GitHubContentSource.
    Failures raise ContentNotFoundError or ContentAccessDeniedError.
    """

    remote: bool

    async def fetch_text(self, path: str) -> str:
        """Return the text stored at ``path``."""
        ...
