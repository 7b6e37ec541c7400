"""Exception hierarchy for event-transformer."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from .contract import ErrorKind

if TYPE_CHECKING:
    from .contract import ClientType, TemplateType


class TransformerError(Exception):
    """Root exception for the entire event-transformer package."""


class TemplateError(TransformerError):
    """Base class for template lookup, compilation and evaluation failures.

    Every subclass carries a ``kind`` tag so callers can branch on the
    failure category without parsing messages. The classification values
    are kept as attributes when the raising layer knows them.
    """

    kind: ClassVar[ErrorKind]

    def __init__(
        self,
        message: str,
        *,
        template_type: TemplateType | None = None,
        source_type: str | None = None,
        client_type: ClientType | None = None,
        template_id: str | None = None,
    ) -> None:
        self.template_type = template_type
        self.source_type = source_type
        self.client_type = client_type
        self.template_id = template_id
        super().__init__(message)


class TemplateNotFoundError(TemplateError):
    """Raised when no compiled template is registered under the requested key."""

    kind = ErrorKind.TEMPLATE_NOT_FOUND


class TemplateEngineNotFoundError(TemplateError):
    """Raised when no engine is configured for a template type.

    This is a configuration defect; pipelines re-raise it unchanged.
    """

    kind = ErrorKind.TEMPLATE_ENGINE_NOT_FOUND

    def __init__(self, template_type: TemplateType) -> None:
        super().__init__(
            f"No template engine configured for Template Type: {template_type.value}",
            template_type=template_type,
        )


class TemplateRenderError(TemplateError):
    """Raised when a resolved template fails to evaluate against the data."""

    kind = ErrorKind.TEMPLATE_RENDER_ERROR


class TemplateCompilationError(TemplateError):
    """Raised when template text is not valid for the engine grammar."""

    kind = ErrorKind.TEMPLATE_COMPILATION_ERROR


class FunctionalityNotSupportedError(TemplateError):
    """Raised when an engine is asked for an extension point it lacks.

    Usage: HandlebarsTemplateEngine raises this from ``register_tag``.
    """

    kind = ErrorKind.FUNCTIONALITY_NOT_SUPPORTED

    def __init__(self, engine: str, functionality: str) -> None:
        self.engine = engine
        self.functionality = functionality
        super().__init__(f"{engine} does not support {functionality}")


# ── Content sources ──────────────────────────────────────────────────


class ContentSourceError(TransformerError):
    """Base class for failures while fetching manifest or template text."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to fetch {path}: {reason}")


class ContentNotFoundError(ContentSourceError):
    """Raised when the requested file does not exist in the source."""


class ContentAccessDeniedError(ContentSourceError):
    """Raised when the source refuses access (bad or missing credential)."""


# ── Setup, input and delivery ────────────────────────────────────────


class ManifestError(TransformerError):
    """Raised when the template manifest is malformed or inconsistent."""


class InvalidEventDataError(TransformerError):
    """Raised when raw event data cannot be parsed as JSON."""


class DeliveryError(TransformerError):
    """Raised when a delivery step is misconfigured."""


__all__ = [
    "ContentAccessDeniedError",
    "ContentNotFoundError",
    "ContentSourceError",
    "DeliveryError",
    "FunctionalityNotSupportedError",
    "InvalidEventDataError",
    "ManifestError",
    "TemplateCompilationError",
    "TemplateEngineNotFoundError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRenderError",
    "TransformerError",
]
