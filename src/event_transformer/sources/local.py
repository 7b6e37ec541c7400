"""Filesystem content source."""

from __future__ import annotations

import logging
from pathlib import Path

from ..exceptions import ContentAccessDeniedError, ContentNotFoundError
from ..ports.source import IContentSource

logger = logging.getLogger(__name__)


class LocalContentSource(IContentSource):
    """
    Reads manifest and template files from a local directory.

    Directory structure:
        TransformerConfig.json
        CardTemplate/{client_type}/{template_type}/{template_name}
        EventTemplate/{template_type}/{template_name}
    """

    remote = False

    def __init__(self, root: Path | str = ".", encoding: str = "utf-8") -> None:
        self.root = Path(root).resolve()
        self.encoding = encoding

    async def fetch_text(self, path: str) -> str:
        target = (self.root / path.lstrip("/")).resolve()
        if not target.is_relative_to(self.root):
            raise ContentAccessDeniedError(path, f"outside of {self.root}")
        try:
            text = target.read_text(encoding=self.encoding)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise ContentNotFoundError(path, f"no such file under {self.root}") from e
        except PermissionError as e:
            raise ContentAccessDeniedError(path, str(e)) from e
        logger.debug(f"Read {path} from {self.root}")
        return text

    def __repr__(self) -> str:
        return f"LocalContentSource(root={str(self.root)!r})"
