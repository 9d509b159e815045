#!/usr/bin/env python3
"""
Integration tests for CLI Main Entry Point

Tests CLI command execution with fake collaborators in place of the HTTP transport.
"""

import pytest
from click.testing import CliRunner

from tests.fixtures.fake_messaging import FakeMessageClient, echo_outcomes, replies_for
from waybill_sync.cli import main as cli_main
from waybill_sync.core.config import Config, Environment, JobConfig
from waybill_sync.core.messaging import CollaboratorError


@pytest.mark.integration
class TestCLIMainIntegration:
    """Test main CLI entry point with real command execution."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()
        self.config = Config(environment=Environment.TEST, job=JobConfig(store_id="store-1"))

    @pytest.fixture(autouse=True)
    def patch_config(self, monkeypatch):
        monkeypatch.setattr(cli_main, "get_config", lambda: self.config)

    def use_client(self, monkeypatch, client):
        monkeypatch.setattr(cli_main, "HttpMessageClient", lambda *args, **kwargs: client)

    def test_help_command_lists_all_subcommands(self):
        result = self.runner.invoke(cli_main.main, ["--help"])

        assert result.exit_code == 0
        assert "Waybill Sync" in result.output
        for command in ["version", "config", "run"]:
            assert command in result.output

    def test_version_command_shows_version_info(self):
        result = self.runner.invoke(cli_main.main, ["version"])

        assert result.exit_code == 0
        assert "Waybill Sync v" in result.output
        assert "Author:" in result.output

    def test_config_command_shows_configuration(self):
        result = self.runner.invoke(cli_main.main, ["config"])

        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert '"store_id": "store-1"' in result.output
        assert '"environment": "test"' in result.output

    def test_verbose_flag_shows_store(self):
        result = self.runner.invoke(cli_main.main, ["--verbose", "config"])

        assert result.exit_code == 0
        assert "Environment: test" in result.output
        assert "Store: store-1" in result.output

    def test_run_reports_summary(self, monkeypatch, sample_waybill, sample_order):
        client = FakeMessageClient(
            replies_for(
                waybills=[sample_waybill],
                orders=[sample_order],
                outcomes=echo_outcomes(lambda invoice: "success"),
            )
        )
        self.use_client(monkeypatch, client)

        result = self.runner.invoke(cli_main.main, ["run", "--job-id", "cli-1"])

        assert result.exit_code == 0
        assert "Job cli-1: 1 waybills, 1 orders, 1 matched, 1 uploaded, 0 failed" in result.output
        assert client.emitted_patterns == ["sendSuccessInvoiceUpload"]

    def test_run_status_and_window_overrides(self, monkeypatch, sample_waybill):
        self.config.job.vendor_id = "A00012345"
        client = FakeMessageClient(replies_for(waybills=[sample_waybill], orders=[]))
        self.use_client(monkeypatch, client)

        result = self.runner.invoke(cli_main.main, ["run", "--status", "departure", "--lookback-days", "2"])

        assert result.exit_code == 0
        query = client.payload_for("newGetCoupangOrderList")
        assert query["status"] == "DEPARTURE"
        assert query["vendorId"] == "A00012345"
        assert "from" in query and "to" in query

    def test_run_without_matches_reports_nothing_to_upload(self, monkeypatch, sample_waybill):
        client = FakeMessageClient(replies_for(waybills=[sample_waybill], orders=[]))
        self.use_client(monkeypatch, client)

        result = self.runner.invoke(cli_main.main, ["run", "--job-id", "cli-3"])

        assert result.exit_code == 0
        assert "Job cli-3: nothing to upload (1 waybills, 0 orders, 0 matched)" in result.output
        assert "uploadInvoices" not in client.sent_patterns

    def test_run_failure_exits_nonzero(self, monkeypatch):
        client = FakeMessageClient({"deliveryExtraction": CollaboratorError("onch unreachable")})
        self.use_client(monkeypatch, client)

        result = self.runner.invoke(cli_main.main, ["run", "--job-id", "cli-2"])

        assert result.exit_code == 1
        assert "Job cli-2 failed" in result.output
        assert "onch unreachable" in result.output
        assert client.emitted_patterns == ["sendErrorMail"]

    def test_invalid_command_shows_error(self):
        result = self.runner.invoke(cli_main.main, ["invalid-command"])

        assert result.exit_code != 0
        assert "Error" in result.output or "No such" in result.output
