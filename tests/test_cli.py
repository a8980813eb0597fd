"""Tests for the typer CLI with the agent mocked out."""

from unittest.mock import patch

from typer.testing import CliRunner

from elevate_cv.cli import app
from elevate_cv.clients.llm_client import LLMResponse
from elevate_cv.errors import ConfigError
from elevate_cv.pipeline.career_agent import CareerAgent

runner = CliRunner()


def test_themes_lists_all():
    result = runner.invoke(app, ["themes"])
    assert result.exit_code == 0
    for name in ("tech", "corporate", "creative", "medical", "finance"):
        assert name in result.output


def test_generate_writes_markdown_and_html(tmp_path, agent, mock_llm_client, draft_json):
    mock_llm_client.generate.return_value = LLMResponse(draft_json, 10, 5)
    output = tmp_path / "cv.md"
    with patch("elevate_cv.cli._build_agent", return_value=(agent, mock_llm_client)):
        result = runner.invoke(app, ["generate", "Lead Product Designer", "-o", str(output), "--html"])

    assert result.exit_code == 0, result.output
    assert "## Professional Summary" in output.read_text(encoding="utf-8")
    html = output.with_suffix(".html").read_text(encoding="utf-8")
    assert "@page" in html
    assert "Print as PDF" in html


def test_generate_reports_malformed_reply(tmp_path, agent, mock_llm_client):
    mock_llm_client.generate.return_value = LLMResponse("no json here", 10, 5)
    with patch("elevate_cv.cli._build_agent", return_value=(agent, mock_llm_client)):
        result = runner.invoke(app, ["generate", "Designer", "-o", str(tmp_path / "cv.md")])

    assert result.exit_code == 1
    assert "could not be understood" in result.output


def test_missing_api_key_exits(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with patch("elevate_cv.cli.require_api_key", side_effect=ConfigError("ANTHROPIC_API_KEY is not set")):
        result = runner.invoke(app, ["generate", "Designer"])
    assert result.exit_code == 1
    assert "ANTHROPIC_API_KEY" in result.output


def test_gap_check_verbose_reports_usage(
    tmp_path, mock_llm_client, mock_search_client, app_config, gap_json, sample_cv_text, sample_jd_text
):
    cv = tmp_path / "cv.txt"
    cv.write_text(sample_cv_text, encoding="utf-8")
    jd = tmp_path / "jd.txt"
    jd.write_text(sample_jd_text, encoding="utf-8")
    mock_llm_client.generate.return_value = LLMResponse(gap_json, 10, 5)
    mock_llm_client.get_token_summary.return_value = {"input": 10, "output": 5, "calls": [("m", 10, 5)]}
    mock_search_client.get_search_count.return_value = 1
    agent = CareerAgent(mock_llm_client, app_config, search=mock_search_client)

    with patch("elevate_cv.cli._build_agent", return_value=(agent, mock_llm_client)):
        result = runner.invoke(app, ["gap-check", "--cv", str(cv), "--jd", str(jd), "--verbose"])

    assert result.exit_code == 0, result.output
    assert "Kubernetes" in result.output
    assert "Tokens: 10 in / 5 out over 1 call(s)" in result.output
    assert "Searches: 1" in result.output
