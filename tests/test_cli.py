"""
Tests for the command line entry point: usage on empty input, answer on stdout, exit codes.
"""

from unittest.mock import AsyncMock, patch

import pytest

from weblook.agent.graph import PipelineResult
from weblook.cli import main
from weblook.core.errors import DecompositionError, RetrievalError


def test_empty_question_prints_usage_and_exits_zero(capsys: pytest.CaptureFixture) -> None:
    with patch("weblook.cli.run_pipeline", new_callable=AsyncMock) as mock_run:
        code = main([])
    assert code == 0
    mock_run.assert_not_awaited()
    out, err = capsys.readouterr()
    assert "Please provide a question" in err
    assert "Example Usage" in out


def test_arguments_are_joined_and_answer_printed(capsys: pytest.CaptureFixture) -> None:
    result = PipelineResult(answer="The capital of France is Paris.", queries=["a", "b", "c"])
    with patch("weblook.cli.run_pipeline", new_callable=AsyncMock, return_value=result) as mock_run:
        code = main(["What", "is", "the", "capital", "of", "France?"])
    assert code == 0
    mock_run.assert_awaited_once_with("What is the capital of France?")
    out, _ = capsys.readouterr()
    assert "FINAL ANSWER" in out
    assert out.rstrip().endswith("The capital of France is Paris.")


@pytest.mark.parametrize(
    "error",
    [
        DecompositionError("Failed to communicate with the LLM service after 3 attempts."),
        RetrievalError("Research agent failed: navigation timeout"),
    ],
)
def test_pipeline_failure_is_logged_and_exits_nonzero(error, caplog: pytest.LogCaptureFixture) -> None:
    with patch("weblook.cli.run_pipeline", new_callable=AsyncMock, side_effect=error):
        code = main(["Why", "is", "the", "sky", "blue?"])
    assert code == 1
    assert any(error.message in r.getMessage() for r in caplog.records)
