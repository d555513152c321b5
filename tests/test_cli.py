"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from mock_interview import __version__
from mock_interview.cli import app


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:

    def test_version(self, runner):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"v{__version__}" in result.output

    def test_config(self, runner):
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "Mock Interview Configuration" in result.output

    def test_analyze_json(self, runner):
        result = runner.invoke(app, [
            "analyze",
            "First I reproduced the problem, then I chose an approach and added testing.",
            "--question", "How do you debug a failing test?",
            "--category", "technical",
            "--json",
        ])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert 0 < payload["score"] <= 10
        assert set(payload) >= {"completeness", "clarity", "relevance", "confidence", "insights"}

    def test_analyze_table(self, runner):
        result = runner.invoke(app, ["analyze", "um", "--category", "behavioral"])

        assert result.exit_code == 0
        assert "Answer Analysis" in result.output
        assert "too brief" in result.output

    def test_practice_session(self, runner):
        answers = "\n".join([
            "First I gathered the requirements, then I designed the approach.",
            "I led the implementation and we improved latency by 30%.",
            "",
        ]) + "\n"

        result = runner.invoke(app, ["practice", "--type", "technical", "--count", "3"], input=answers)

        assert result.exit_code == 0, result.output
        assert "Overall score" in result.output
        assert "Next steps" in result.output

    def test_practice_rejects_unknown_type(self, runner):
        result = runner.invoke(app, ["practice", "--type", "panel"])

        assert result.exit_code == 1
        assert "VALIDATION_ERROR" in result.output
