"""
Environment configuration and the scheduler built from it.
"""
from datetime import date
from types import SimpleNamespace

import pytest

from telecom_provider import scheduler
from telecom_provider.core import config


class TestConfig:
    def test_database_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp/custom.sqlite")
        assert config.get_database_url() == "sqlite:///tmp/custom.sqlite"

    def test_log_level_is_upper_case(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert config.get_log_level() == "DEBUG"

    def test_log_dir(self, log_dir):
        assert config.get_log_dir() == str(log_dir)

    @pytest.mark.parametrize(
        "raw, expected",
        [("04:30", (4, 30)), ("23:05", (23, 5)), ("soon", (3, 0)), ("4", (3, 0))],
    )
    def test_snapshot_run_hour(self, monkeypatch, raw, expected):
        monkeypatch.setenv("USAGE_SNAPSHOT_RUN_HOUR", raw)
        assert config.get_snapshot_run_hour() == expected

    def test_snapshot_run_hour_default(self, monkeypatch):
        monkeypatch.delenv("USAGE_SNAPSHOT_RUN_HOUR", raising=False)
        assert config.get_snapshot_run_hour() == (3, 0)

    @pytest.mark.parametrize(
        "raw, expected",
        [("2025-02", date(2025, 2, 1)), ("2024-12", date(2024, 12, 1)), ("May", date(2025, 5, 1))],
    )
    def test_report_month(self, monkeypatch, raw, expected):
        monkeypatch.setenv("REPORT_MONTH", raw)
        assert config.get_report_month() == expected


class TestScheduler:
    def test_snapshot_job_is_registered(self, monkeypatch):
        monkeypatch.setenv("USAGE_SNAPSHOT_RUN_HOUR", "04:30")

        sched = scheduler.build_scheduler()

        job = sched.get_job("usage_snapshot_job")
        assert job is not None
        assert job.name == "Daily Service Plan Usage Snapshot"
        fields = {field.name: str(field) for field in job.trigger.fields}
        assert fields["hour"] == "4"
        assert fields["minute"] == "30"
        assert not sched.running

    def test_only_one_job(self):
        sched = scheduler.build_scheduler()
        assert [job.id for job in sched.get_jobs()] == ["usage_snapshot_job"]

    def test_listener_logs_outcome(self, caplog):
        with caplog.at_level("INFO", logger="Scheduler"):
            scheduler.job_listener(SimpleNamespace(job_id="usage_snapshot_job", exception=None))
            scheduler.job_listener(
                SimpleNamespace(job_id="usage_snapshot_job", exception=RuntimeError("boom"))
            )

        messages = [record.getMessage() for record in caplog.records]
        assert "Job usage_snapshot_job executed successfully" in messages
        assert "Job usage_snapshot_job failed: boom" in messages
