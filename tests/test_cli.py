"""Tests for the typer CLI."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest
from typer.testing import CliRunner

from text_analyzer import cli
from text_analyzer.config import RetryConfig
from text_analyzer.errors import TransportError
from text_analyzer.service import AnalysisService

from conftest import openai_envelope

runner = CliRunner()

CONFIG = """\
active: main
providers:
  - id: main
    name: Main
    kind: openai
    model: gpt-4
    api_key: sk-very-secret
  - id: local
    name: Local
    kind: custom
    model: custom-model
    enabled: false
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG)
    return path


@pytest.fixture
def transport(monkeypatch):
    fake = AsyncMock()
    fake.post = AsyncMock(return_value=openai_envelope("Connection successful"))

    def from_config(config, transport=None):
        return AnalysisService(fake, retry=RetryConfig(backoff_min_seconds=0, backoff_max_seconds=0))

    monkeypatch.setattr(cli.AnalysisService, "from_config", from_config)
    return fake


class TestProvidersCommand:
    def test_lists_providers_without_keys(self, config_path):
        result = runner.invoke(cli.app, ["providers", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "main" in result.output
        assert "local" in result.output
        assert "sk-very-secret" not in result.output

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("active: ghost\n")
        result = runner.invoke(cli.app, ["providers", "--config", str(path)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_unknown_config_key_reported(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("retry:\n  attempts: 3\n")
        result = runner.invoke(cli.app, ["providers", "--config", str(path)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestAnalyzeCommand:
    def test_json_output(self, config_path, tmp_path, transport):
        doc = tmp_path / "doc.txt"
        doc.write_text("Short text. Another one.")
        transport.post.return_value = openai_envelope("not structured")

        result = runner.invoke(cli.app, ["analyze", str(doc), "--config", str(config_path), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["summary"] == "not structured"
        assert data["readabilityScore"]["level"] == "easy"

    def test_table_output(self, config_path, tmp_path, transport):
        doc = tmp_path / "doc.txt"
        doc.write_text("Short text.")
        transport.post.return_value = openai_envelope("plain answer")

        result = runner.invoke(cli.app, ["analyze", str(doc), "--config", str(config_path)])

        assert result.exit_code == 0
        assert "Readability" in result.output
        assert "plain answer" in result.output

    def test_missing_file(self, config_path, tmp_path):
        result = runner.invoke(cli.app, ["analyze", str(tmp_path / "nope.txt"), "--config", str(config_path)])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_transport_failure(self, config_path, tmp_path, transport):
        doc = tmp_path / "doc.txt"
        doc.write_text("Short text.")
        transport.post.side_effect = TransportError(401, "invalid key")

        result = runner.invoke(cli.app, ["analyze", str(doc), "--config", str(config_path)])

        assert result.exit_code == 1
        assert "AI analysis failed" in result.output

    def test_disabled_provider(self, config_path, tmp_path, transport):
        doc = tmp_path / "doc.txt"
        doc.write_text("Short text.")

        result = runner.invoke(
            cli.app, ["analyze", str(doc), "--config", str(config_path), "--provider", "local"]
        )

        assert result.exit_code == 1
        transport.post.assert_not_called()


class TestConnectionCommand:
    def test_ok(self, config_path, transport):
        result = runner.invoke(cli.app, ["test-connection", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "OK" in result.output

    def test_failed(self, config_path, transport):
        transport.post.return_value = {}
        result = runner.invoke(cli.app, ["test-connection", "main", "--config", str(config_path)])
        assert result.exit_code == 1
        assert "FAILED" in result.output

    def test_unknown_provider(self, config_path, transport):
        result = runner.invoke(cli.app, ["test-connection", "ghost", "--config", str(config_path)])
        assert result.exit_code == 1
        assert "Unknown provider" in result.output
