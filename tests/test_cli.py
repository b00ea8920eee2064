"""
End-to-end runs of the command line against a temporary database file.
"""
import pytest

from launcher import render
from launcher.main import build_parser, main
from telecom_provider.db import engine_sync


@pytest.fixture
def cli_db(tmp_path, monkeypatch):
    """Point the process-wide engine at a fresh file and widen the console."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.sqlite'}")
    monkeypatch.setattr(engine_sync, "_sync_engine", None)
    monkeypatch.setattr(render.console, "width", 250)
    yield
    if engine_sync._sync_engine is not None:
        engine_sync._sync_engine.dispose()


@pytest.fixture
def seeded_cli(cli_db, capsys):
    assert main(["init-db", "--seed"]) == 0
    capsys.readouterr()


class TestParser:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["--version"])
        assert excinfo.value.code == 0
        assert "telecom-provider 1.0.0" in capsys.readouterr().out

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_unknown_report(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["report", "nothing"])

    def test_malformed_month(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["report", "monthly-usage", "--month", "May"])


class TestInitDb:
    def test_seed_once(self, cli_db, capsys):
        assert main(["init-db", "--seed"]) == 0
        assert "Sample data loaded." in capsys.readouterr().out

        assert main(["init-db", "--seed"]) == 0
        assert "seed skipped" in capsys.readouterr().out


class TestCommands:
    def test_single_report(self, seeded_cli, capsys):
        assert main(["report", "customers-per-city"]) == 0
        out = capsys.readouterr().out
        assert "Customers per city" in out
        assert "Berlin" in out

    def test_all_reports(self, seeded_cli, capsys):
        assert main(["report", "all", "--month", "2025-05", "--as-of", "2025-06-30"]) == 0
        out = capsys.readouterr().out
        assert "Promotion effectiveness" in out
        assert "William Anderson" in out

    def test_billing_summary(self, seeded_cli, capsys):
        assert main(["billing-summary", "1"]) == 0
        assert "Fully Paid" in capsys.readouterr().out

    def test_billing_summary_of_unknown_customer(self, seeded_cli, capsys):
        assert main(["billing-summary", "999"]) == 0
        assert "no rows" in capsys.readouterr().out

    def test_ledger_demo(self, seeded_cli, capsys):
        assert main(["ledger-demo", "--customer-id", "11"]) == 0
        out = capsys.readouterr().out
        assert "Rolled back to savepoint 'after_first'." in out
        assert "Committed 2 ledger entries." in out
        assert "Customer withdrawal after rollback" in out

    def test_ledger_demo_for_missing_customer(self, seeded_cli, capsys):
        assert main(["ledger-demo", "--customer-id", "999"]) == 1
        assert "ForeignKeyViolationError" in capsys.readouterr().out

    def test_refresh_usage(self, seeded_cli, capsys):
        assert main(["refresh-usage"]) == 0
        out = capsys.readouterr().out
        assert "Latest usage snapshot" in out
        assert "601.00" in out
