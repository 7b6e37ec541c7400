"""GitHub repository content source using httpx."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from ..config import DEFAULT_SETTINGS, TransformerSettings
from ..exceptions import ContentAccessDeniedError, ContentNotFoundError, ContentSourceError
from ..ports.source import IContentSource
from ..transport import http_client

logger = logging.getLogger(__name__)

GITHUB_RAW_MEDIA_TYPE = "application/vnd.github.raw+json"
GITHUB_API_VERSION = "2022-11-28"


class GitHubContentSource(IContentSource):
    """
    Fetches files from one branch of a GitHub repository.

    Uses the contents API with the raw media type, so the response body is
    the file text. An ``access_token`` is required for private repositories.
    Pass ``client`` to reuse a connection pool; it is not closed here.
    """

    remote = True

    def __init__(
        self,
        repository: str,
        branch: str,
        access_token: str | None = None,
        *,
        settings: TransformerSettings = DEFAULT_SETTINGS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        owner, _, name = repository.partition("/")
        if not owner or not name or "/" in name:
            raise ValueError(f"Repository must look like 'owner/name', got {repository!r}")
        self.repository = repository
        self.branch = branch
        self.access_token = access_token
        self.settings = settings
        self._client = client

    def contents_url(self, path: str) -> str:
        api = self.settings.github_api_url.rstrip("/")
        return f"{api}/repos/{self.repository}/contents/{quote(path.lstrip('/'), safe='/')}"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": GITHUB_RAW_MEDIA_TYPE,
            "User-Agent": self.settings.user_agent,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def fetch_text(self, path: str) -> str:
        location = f"{self.repository}@{self.branch}:{path}"
        try:
            async with http_client(self._client, self.settings.timeout) as client:
                response = await client.get(
                    self.contents_url(path),
                    params={"ref": self.branch},
                    headers=self._headers(),
                )
        except httpx.HTTPError as e:
            raise ContentSourceError(location, f"request failed: {e}") from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise ContentNotFoundError(location, "not found (or token lacks access)")
        if response.status_code in (httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN):
            raise ContentAccessDeniedError(location, f"HTTP {response.status_code}")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ContentSourceError(location, f"HTTP {e.response.status_code}") from e

        logger.debug(f"Fetched {location} ({len(response.content)} bytes)")
        return response.text

    def __repr__(self) -> str:
        return f"GitHubContentSource(repository={self.repository!r}, branch={self.branch!r})"
