"""Tests for the command line entry point."""

import json

import click
import pytest
from click.testing import CliRunner

from event_transformer.cli import OUTPUT_NAME, cli, load_helpers

HELPERS = {"initials": lambda value: "".join(part[0] for part in value.split())}

ACTION_ENV = {
    name: None
    for name in (
        "GITHUB_OUTPUT",
        "GITHUB_REPOSITORY",
        "GITHUB_WORKSPACE",
        "INPUT_ACCESSTOKEN",
        "INPUT_CLIENTTYPE",
        "INPUT_CUSTOMHELPERS",
        "INPUT_DATA",
        "INPUT_DISPATCH",
        "INPUT_REPONAME",
        "INPUT_SOURCETYPE",
        "INPUT_TEMPLATETYPE",
        "INPUT_TRANSFORMERINSAMEREPO",
        "INPUT_WEBHOOKURL",
        "RUNNER_DEBUG",
    )
}


@pytest.fixture
def runner():
    return CliRunner(env=ACTION_ENV)


@pytest.fixture
def local_args(workspace, event_data):
    return [
        "--transformer-in-same-repo",
        "true",
        "--workspace",
        str(workspace),
        "--data",
        json.dumps(event_data),
    ]


def test_render_card_to_output_file(runner, local_args, tmp_path):
    """Test the rendered card is published as a step output."""
    output_file = tmp_path / "github_output"

    result = runner.invoke(
        cli,
        [
            *local_args,
            "--template-type",
            "HandleBars",
            "--source-type",
            "PullRequest_Opened",
            "--client-type",
            "slack",
            "--output-file",
            str(output_file),
        ],
    )

    assert result.exit_code == 0, result.output
    assert output_file.read_text() == (
        f'{OUTPUT_NAME}={{"text":"#42 Fix flaky test by ada"}}\n'
    )


def test_render_event_to_stdout(runner, local_args):
    """Test event payloads are printed when no output file is set."""
    result = runner.invoke(
        cli, [*local_args, "--template-type", "jinja", "--source-type", "Issue_Opened"]
    )

    assert result.exit_code == 0, result.output
    assert '{"kind":"issue","title":"Fix flaky test"}' in result.output


def test_data_from_file(runner, workspace, event_data, tmp_path):
    """Test event data can be read from a file."""
    data_file = tmp_path / "event.json"
    data_file.write_text(json.dumps(event_data))

    result = runner.invoke(
        cli,
        [
            "--transformer-in-same-repo",
            "true",
            "--workspace",
            str(workspace),
            "--data-file",
            str(data_file),
            "--template-type",
            "Jinja",
            "--source-type",
            "PullRequest_Opened",
            "--client-type",
            "teams",
        ],
    )

    assert result.exit_code == 0, result.output
    assert '"summary":"PR #42"' in result.output


def test_missing_template_fails(runner, local_args):
    """Test a missing template exits with the pipeline message."""
    result = runner.invoke(
        cli,
        [
            *local_args,
            "--template-type",
            "HandleBars",
            "--source-type",
            "PullRequest_Closed",
            "--client-type",
            "slack",
        ],
    )

    assert result.exit_code == 1
    assert (
        "No template found for Template Type: HandleBars, "
        "Source Type: PullRequest_Closed and Client Type: slack"
    ) in result.output


def test_invalid_event_data_fails(runner, workspace):
    """Test unparseable data exits with an error."""
    result = runner.invoke(
        cli,
        [
            "--transformer-in-same-repo",
            "true",
            "--workspace",
            str(workspace),
            "--data",
            "{oops",
            "--template-type",
            "Jinja",
            "--source-type",
            "Issue_Opened",
        ],
    )

    assert result.exit_code == 1
    assert "Event data is not valid JSON" in result.output


def test_rendered_output_must_be_json(runner, tmp_path):
    """Test templates rendering non-JSON text fail the run."""
    (tmp_path / "TransformerConfig.json").write_text(
        json.dumps([{"TemplateType": "Jinja", "SourceType": "Push", "TemplateName": "p.j2"}])
    )
    folder = tmp_path / "EventTemplate" / "Jinja"
    folder.mkdir(parents=True)
    (folder / "p.j2").write_text("pushed to {{ ref }}")

    result = runner.invoke(
        cli,
        [
            "--transformer-in-same-repo",
            "true",
            "--workspace",
            str(tmp_path),
            "--data",
            '{"ref": "main"}',
            "--template-type",
            "Jinja",
            "--source-type",
            "Push",
        ],
    )

    assert result.exit_code == 1
    assert "Rendered template is not valid JSON" in result.output


def test_custom_helpers(runner, tmp_path):
    """Test helpers are loaded from a module attribute."""
    (tmp_path / "TransformerConfig.json").write_text(
        json.dumps([{"TemplateType": "Jinja", "SourceType": "Push", "TemplateName": "p.j2"}])
    )
    folder = tmp_path / "EventTemplate" / "Jinja"
    folder.mkdir(parents=True)
    (folder / "p.j2").write_text('{"who": {{ name | initials | tojson }} }')

    result = runner.invoke(
        cli,
        [
            "--transformer-in-same-repo",
            "true",
            "--workspace",
            str(tmp_path),
            "--data",
            '{"name": "Ada Lovelace"}',
            "--template-type",
            "Jinja",
            "--source-type",
            "Push",
            "--custom-helpers",
            f"{__name__}:HELPERS",
        ],
    )

    assert result.exit_code == 0, result.output
    assert '{"who":"AL"}' in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["--template-type", "Jinja", "--source-type", "Push", "--repo-name", "acme/t"],
        ["--template-type", "Jinja", "--source-type", "Push", "--data", "{}"],
        ["--template-type", "Liquid", "--source-type", "Push", "--data", "{}"],
        ["--source-type", "Push", "--data", "{}", "--repo-name", "acme/t"],
    ],
)
def test_usage_errors(runner, args):
    """Test missing or invalid inputs are usage errors."""
    result = runner.invoke(cli, args)

    assert result.exit_code == 2


def test_dispatch_requires_repository(runner, local_args):
    """Test dispatching without a target repository fails."""
    result = runner.invoke(
        cli,
        [
            *local_args,
            "--template-type",
            "Jinja",
            "--source-type",
            "Issue_Opened",
            "--dispatch",
        ],
    )

    assert result.exit_code == 1
    assert "--dispatch-repository" in result.output


def test_load_helpers():
    """Test helper mappings are imported by reference."""
    assert load_helpers(f"{__name__}:HELPERS") == HELPERS


@pytest.mark.parametrize(
    "reference", ["no_colon", "missing_module_xyz:HELPERS", "json:nope", "json:__name__"]
)
def test_load_helpers_bad_reference(reference):
    """Test bad references raise BadParameter."""
    with pytest.raises(click.BadParameter):
        load_helpers(reference)


def test_remote_setup_requires_repo_name(runner):
    """Test remote setup without a repository is a usage error naming the option."""
    result = runner.invoke(
        cli, ["--template-type", "Jinja", "--source-type", "Push", "--data", '{"ref": "main"}']
    )

    assert result.exit_code == 2
    assert "--repo-name is required" in result.output
