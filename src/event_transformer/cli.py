"""Command line entry point, usable as a GitHub Action step.

Every option can also be supplied through the ``INPUT_*`` environment
variable GitHub Actions sets for the matching action input.
"""

from __future__ import annotations

import asyncio
import importlib
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import click

from .config import DEFAULT_SETTINGS, TransformerSettings
from .contract import ClientType, TemplateType
from .delivery.dispatch import RepositoryDispatchSender
from .delivery.webhook import WebhookSender
from .exceptions import DeliveryError, TemplateRenderError, TransformerError
from .manager import TemplateManager
from .sanitization import parse_event_data, redact_secrets
from .transformer.models import CustomEngineOptions, CustomTemplatingOptions, TemplateSelector

logger = logging.getLogger("event_transformer.cli")

T = TypeVar("T")

OUTPUT_NAME = "renderedTemplate"


def coro(f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Run an async click command to completion."""

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return asyncio.run(f(*args, **kwargs))  # type: ignore[arg-type]

    return wrapper


class EnumChoice(click.ParamType):
    """Click parameter accepting an enum member by value or name."""

    def __init__(self, enum_cls: type[TemplateType] | type[ClientType]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Enum:
        if isinstance(value, self.enum_cls):
            return value
        try:
            return self.enum_cls.parse(str(value))
        except ValueError as e:
            self.fail(str(e), param, ctx)


def load_helpers(reference: str) -> dict[str, Callable[..., Any]]:
    """
    Import a mapping of helper callables from ``package.module:attribute``.

    The attribute may be the mapping itself or a zero-argument callable
    returning it.
    """
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(f"expected 'module:attribute', got {reference!r}")
    try:
        module = importlib.import_module(module_name)
        helpers = getattr(module, attribute)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"cannot load helpers from {reference!r}: {e}") from e
    if callable(helpers) and not isinstance(helpers, Mapping):
        helpers = helpers()
    if not isinstance(helpers, Mapping) or not all(callable(h) for h in helpers.values()):
        raise click.BadParameter(f"{reference!r} is not a mapping of helper callables")
    return dict(helpers)


def write_output(name: str, value: str, output_file: Path | None) -> None:
    """Publish a step output, or print it when not running inside an action."""
    if output_file is None:
        click.echo(value)
        return
    with output_file.open("a", encoding="utf-8") as fh:
        fh.write(f"{name}={value}\n")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@click.command(name="event-transformer")
@click.version_option(version="0.1.0", prog_name="event-transformer")
@click.option("--repo-name", envvar="INPUT_REPONAME", help="Repository holding the templates (owner/name).")
@click.option("--branch-name", envvar="INPUT_BRANCHNAME", default="main", show_default=True)
@click.option(
    "--template-type",
    envvar="INPUT_TEMPLATETYPE",
    type=EnumChoice(TemplateType),
    required=True,
    help="Template engine: HandleBars or Jinja (Liquid is not supported).",
)
@click.option("--source-type", envvar="INPUT_SOURCETYPE", required=True, help="e.g. PullRequest_Opened")
@click.option(
    "--client-type",
    envvar="INPUT_CLIENTTYPE",
    type=EnumChoice(ClientType),
    default=None,
    help="Render a card for this client; omit to render an event payload.",
)
@click.option("--access-token", envvar="INPUT_ACCESSTOKEN", default=None)
@click.option("--data", envvar="INPUT_DATA", default=None, help="Event data as JSON.")
@click.option(
    "--data-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read event data from a JSON file instead of --data.",
)
@click.option(
    "--custom-helpers",
    envvar="INPUT_CUSTOMHELPERS",
    default=None,
    help="module:attribute naming a mapping of helper callables.",
)
@click.option(
    "--transformer-in-same-repo",
    envvar="INPUT_TRANSFORMERINSAMEREPO",
    type=click.BOOL,
    default=False,
    help="Read manifest and templates from the local workspace.",
)
@click.option(
    "--workspace",
    envvar="GITHUB_WORKSPACE",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
)
@click.option("--manifest", default=DEFAULT_SETTINGS.manifest_name, show_default=True)
@click.option("--strict/--no-strict", default=False, help="Fail on duplicate manifest keys.")
@click.option("--dispatch/--no-dispatch", envvar="INPUT_DISPATCH", default=False)
@click.option("--dispatch-repository", envvar="GITHUB_REPOSITORY", default=None)
@click.option("--dispatch-event-type", default="custom", show_default=True)
@click.option("--webhook-url", envvar="INPUT_WEBHOOKURL", default=None)
@click.option("--webhook-secret", envvar="INPUT_WEBHOOKSECRET", default=None)
@click.option(
    "--output-file",
    envvar="GITHUB_OUTPUT",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
)
@click.option("-v", "--verbose", is_flag=True, envvar="RUNNER_DEBUG")
@coro
async def cli(
    repo_name: str | None,
    branch_name: str,
    template_type: TemplateType,
    source_type: str,
    client_type: ClientType | None,
    access_token: str | None,
    data: str | None,
    data_file: Path | None,
    custom_helpers: str | None,
    transformer_in_same_repo: bool,
    workspace: Path,
    manifest: str,
    strict: bool,
    dispatch: bool,
    dispatch_repository: str | None,
    dispatch_event_type: str,
    webhook_url: str | None,
    webhook_secret: str | None,
    output_file: Path | None,
    verbose: bool,
) -> None:
    """Render a chat card or event payload from event data and templates."""
    configure_logging(verbose)

    raw = data_file.read_text(encoding="utf-8") if data_file else data
    if raw is None:
        raise click.UsageError("Event data is required (--data or --data-file).")

    options = None
    if custom_helpers:
        options = CustomTemplatingOptions(
            engine_options=[
                CustomEngineOptions(template_type=template_type, helpers=load_helpers(custom_helpers))
            ]
        )

    try:
        event_data = parse_event_data(raw)
        logger.debug("Data received: %s", json.dumps(redact_secrets(event_data)))

        manager = TemplateManager(settings=TransformerSettings(manifest_name=manifest), strict=strict)
        selector = TemplateSelector(
            template_type=template_type, source_type=source_type, client_type=client_type
        )
        if transformer_in_same_repo:
            await manager.setup_template_configuration(workspace, options, selector)
        elif repo_name:
            await manager.setup_template_configuration_from_repo(
                repo_name, branch_name, access_token, options, selector
            )
        else:
            raise click.UsageError(
                "--repo-name is required unless --transformer-in-same-repo is set."
            )

        if client_type is not None:
            rendered = manager.render_card(template_type, source_type, client_type, event_data)
        else:
            rendered = manager.render_event(template_type, source_type, event_data)
        logger.debug("Calculated template: %s", rendered)

        try:
            payload = json.loads(rendered)
        except json.JSONDecodeError as e:
            raise TemplateRenderError(
                f"Rendered template is not valid JSON: {e}",
                template_type=template_type,
                source_type=source_type,
                client_type=client_type,
            ) from e
        write_output(OUTPUT_NAME, json.dumps(payload, separators=(",", ":")), output_file)

        await _deliver(
            payload,
            access_token=access_token,
            dispatch=dispatch,
            dispatch_repository=dispatch_repository,
            dispatch_event_type=dispatch_event_type,
            webhook_url=webhook_url,
            webhook_secret=webhook_secret,
        )
    except TransformerError as e:
        logger.error("%s: %s", type(e).__name__, e)
        raise click.ClickException(str(e)) from e


async def _deliver(
    payload: Any,
    *,
    access_token: str | None,
    dispatch: bool,
    dispatch_repository: str | None,
    dispatch_event_type: str,
    webhook_url: str | None,
    webhook_secret: str | None,
) -> None:
    records = []
    if webhook_url:
        records.append(await WebhookSender(webhook_secret).send(webhook_url, payload))
    if dispatch:
        if not dispatch_repository:
            raise DeliveryError("--dispatch-repository (or GITHUB_REPOSITORY) is required")
        sender = RepositoryDispatchSender(access_token or "", event_type=dispatch_event_type)
        records.append(await sender.send(dispatch_repository, payload))

    failed = [r for r in records if not r.ok]
    if failed:
        raise DeliveryError(
            "; ".join(f"delivery to {r.target} failed: {r.error}" for r in failed)
        )


def main() -> None:
    """Entry point for the console script."""
    cli()


if __name__ == "__main__":
    main()
