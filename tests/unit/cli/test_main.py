"""Tests for CLI entrypoint."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from doc_cache_cli.main import app
from doc_cache_core.exceptions import (
    ConfigurationError,
    DocumentFetchError,
    NonRetryableError,
)
from doc_cache_core.models.options import GetDocumentOptions

runner = CliRunner()


def _invoke(args: list[str], result: object = None, error: Exception | None = None) -> tuple:
    """Run the CLI with settings, logging, and the document read mocked."""
    get_doc = AsyncMock(return_value=result, side_effect=error)
    with (
        patch("doc_cache_cli.main.Settings") as mock_settings_cls,
        patch("doc_cache_cli.main.configure_logging"),
        patch("doc_cache_cli.main._get_document", get_doc),
    ):
        mock_settings_cls.return_value = MagicMock()
        outcome = runner.invoke(app, args)
    return outcome, get_doc


@pytest.mark.unit
class TestGetCommand:
    """Test the 'get' CLI command."""

    def test_prints_document_json(self) -> None:
        """A found document is printed as JSON."""
        outcome, _ = _invoke(["get", "users/alice"], result={"name": "Alice"})
        assert outcome.exit_code == 0
        assert '"name": "Alice"' in outcome.output

    def test_missing_document_exits_1(self) -> None:
        """A missing document prints a notice and exits non-zero."""
        outcome, _ = _invoke(["get", "users/nobody"], result=None)
        assert outcome.exit_code == 1
        assert "Document not found" in outcome.output

    def test_flags_build_options(self) -> None:
        """Cache and retry flags map onto GetDocumentOptions."""
        outcome, get_doc = _invoke(
            [
                "get",
                "users/alice",
                "--cache",
                "--cache-time",
                "inf",
                "--lock",
                "--retry",
                "--max-retries",
                "5",
                "--retry-delay",
                "100",
                "--retry-on",
                "unavailable",
                "--retry-on",
                "aborted",
            ],
            result={},
        )

        assert outcome.exit_code == 0
        options: GetDocumentOptions = get_doc.await_args.args[2]
        assert options.cache_options.enabled is True
        assert options.cache_options.cache_time.time == float("inf")
        assert options.cache_options.cache_time.locked is True
        assert options.cache_options.force_refresh is False
        assert options.retry_options.enabled is True
        assert options.retry_options.max_retries == 5
        assert options.retry_options.retry_delay == 100
        assert options.retry_options.retry_on_error_code == ["unavailable", "aborted"]

    def test_no_retry_on_means_no_allow_list(self) -> None:
        """Without --retry-on every error code is retried."""
        _, get_doc = _invoke(["get", "users/alice", "--retry"], result={})
        options: GetDocumentOptions = get_doc.await_args.args[2]
        assert options.retry_options.retry_on_error_code is None

    def test_fetch_error_exits_1(self) -> None:
        """Remote failures print the error code."""
        outcome, _ = _invoke(
            ["get", "users/alice"], error=DocumentFetchError("boom", code="unavailable")
        )
        assert outcome.exit_code == 1
        assert "unavailable" in outcome.output

    def test_non_retryable_error_exits_1(self) -> None:
        """Allow-list rejections print the underlying code."""
        error = NonRetryableError("not in the retry allow-list")
        error.__cause__ = DocumentFetchError("denied", code="permission-denied")
        outcome, _ = _invoke(["get", "users/alice", "--retry"], error=error)
        assert outcome.exit_code == 1
        assert "permission-denied" in outcome.output

    def test_configuration_error_exits_1(self) -> None:
        """Missing configuration is reported."""
        outcome, _ = _invoke(
            ["get", "users/alice"], error=ConfigurationError("firestore_project_id is required")
        )
        assert outcome.exit_code == 1
        assert "firestore_project_id" in outcome.output


@pytest.mark.unit
class TestClearCommand:
    """Test the 'clear' CLI command."""

    def test_clear_empties_namespace(self) -> None:
        """clear empties the configured namespace."""
        with (
            patch("doc_cache_cli.main.Settings") as mock_settings_cls,
            patch("doc_cache_cli.main.configure_logging"),
            patch("doc_cache_cli.main._clear_cache", AsyncMock()) as clear_cache,
        ):
            mock_settings_cls.return_value = MagicMock(cache_namespace="doc_cache:docs")
            outcome = runner.invoke(app, ["clear"])

        assert outcome.exit_code == 0
        assert "doc_cache:docs" in outcome.output
        clear_cache.assert_awaited_once()
