"""Content sources for manifests and templates."""

from __future__ import annotations

from .github import GitHubContentSource
from .local import LocalContentSource

__all__ = ["GitHubContentSource", "LocalContentSource"]
