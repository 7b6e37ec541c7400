"""Test configuration for event-transformer."""

import json

import pytest

from event_transformer.transformer.registry import EngineRegistry

MANIFEST = [
    {
        "TemplateType": "HandleBars",
        "SourceType": "PullRequest_Opened",
        "ClientType": "slack",
        "TemplateName": "pr_opened.hbs",
    },
    {
        "TemplateType": "Jinja",
        "SourceType": "PullRequest_Opened",
        "ClientType": "teams",
        "TemplateName": "pr_opened.j2",
    },
    {
        "TemplateType": "Jinja",
        "SourceType": "Issue_Opened",
        "TemplateName": "issue_opened.j2",
    },
]


@pytest.fixture
def event_data():
    """Sample pull request event."""
    return {
        "title": "Fix flaky test",
        "number": 42,
        "user": {"login": "ada"},
        "url": "https://github.com/acme/widgets/pull/42",
    }


@pytest.fixture
def registry():
    return EngineRegistry.default()


@pytest.fixture
def workspace(tmp_path):
    """Checkout layout with a manifest plus card and event templates."""
    (tmp_path / "TransformerConfig.json").write_text(json.dumps(MANIFEST))

    slack = tmp_path / "CardTemplate" / "slack" / "HandleBars"
    slack.mkdir(parents=True)
    (slack / "pr_opened.hbs").write_text(
        '{"text": "#{{number}} {{title}} by {{user.login}}"}'
    )

    teams = tmp_path / "CardTemplate" / "teams" / "Jinja"
    teams.mkdir(parents=True)
    (teams / "pr_opened.j2").write_text(
        '{"title": {{ title | tojson }}, "summary": "PR #{{ number }}"}'
    )

    events = tmp_path / "EventTemplate" / "Jinja"
    events.mkdir(parents=True)
    (events / "issue_opened.j2").write_text('{"kind": "issue", "title": {{ title | tojson }} }')
    return tmp_path


@pytest.fixture
def manifest_records():
    return [dict(record) for record in MANIFEST]
