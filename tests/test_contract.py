"""Tests for classification enums and the error taxonomy."""

import pytest

from event_transformer.contract import ClientType, ErrorKind, TemplateType
from event_transformer.exceptions import (
    ContentNotFoundError,
    ContentSourceError,
    FunctionalityNotSupportedError,
    TemplateCompilationError,
    TemplateEngineNotFoundError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRenderError,
    TransformerError,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("HandleBars", TemplateType.HANDLEBARS),
        ("handlebars", TemplateType.HANDLEBARS),
        ("JINJA", TemplateType.JINJA),
        (" Jinja ", TemplateType.JINJA),
    ],
)
def test_template_type_parse(text, expected):
    """Test template types parse by value or name, ignoring case."""
    assert TemplateType.parse(text) is expected


def test_client_type_parse():
    """Test client types parse by value or name."""
    assert ClientType.parse("slack") is ClientType.SLACK
    assert ClientType.parse("TEAMS") is ClientType.TEAMS


def test_parse_unknown_lists_allowed_values():
    """Test unknown values raise ValueError naming the choices."""
    with pytest.raises(ValueError, match="Expected one of: HandleBars, Jinja"):
        TemplateType.parse("Mustache")


def test_liquid_is_reported_as_unsupported():
    """Test Liquid manifests get a pointed message instead of a generic one."""
    with pytest.raises(ValueError, match="Liquid templates are not supported"):
        TemplateType.parse("liquid")


def test_error_kinds():
    """Test every template error carries its kind tag."""
    assert TemplateNotFoundError("x").kind is ErrorKind.TEMPLATE_NOT_FOUND
    assert TemplateRenderError("x").kind is ErrorKind.TEMPLATE_RENDER_ERROR
    assert TemplateCompilationError("x").kind is ErrorKind.TEMPLATE_COMPILATION_ERROR
    assert (
        TemplateEngineNotFoundError(TemplateType.JINJA).kind
        is ErrorKind.TEMPLATE_ENGINE_NOT_FOUND
    )
    assert (
        FunctionalityNotSupportedError("Engine", "tags").kind
        is ErrorKind.FUNCTIONALITY_NOT_SUPPORTED
    )


def test_error_hierarchy():
    """Test all errors share the package root."""
    assert issubclass(TemplateError, TransformerError)
    assert issubclass(ContentNotFoundError, ContentSourceError)
    assert issubclass(ContentSourceError, TransformerError)


def test_template_error_keeps_context():
    """Test classification values are kept as attributes."""
    error = TemplateNotFoundError(
        "missing",
        template_type=TemplateType.JINJA,
        source_type="Push",
        client_type=ClientType.TEAMS,
        template_id="card:Jinja:Push:teams",
    )

    assert str(error) == "missing"
    assert error.template_type is TemplateType.JINJA
    assert error.source_type == "Push"
    assert error.client_type is ClientType.TEAMS
    assert error.template_id == "card:Jinja:Push:teams"


def test_engine_not_found_message():
    """Test the engine-not-found message names the template type."""
    error = TemplateEngineNotFoundError(TemplateType.HANDLEBARS)

    assert str(error) == "No template engine configured for Template Type: HandleBars"
    assert error.template_type is TemplateType.HANDLEBARS


def test_functionality_not_supported_message():
    """Test the capability error names engine and functionality."""
    error = FunctionalityNotSupportedError("HandlebarsTemplateEngine", "custom tags")

    assert str(error) == "HandlebarsTemplateEngine does not support custom tags"
    assert error.engine == "HandlebarsTemplateEngine"
    assert error.functionality == "custom tags"
