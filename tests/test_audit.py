"""
The JSON-lines audit log and its file handler.
"""
import json
import logging

from telecom_provider.core import audit


def _file_handlers():
    return [h for h in audit.audit_logger.handlers if isinstance(h, logging.FileHandler)]


class TestAuditLog:
    def test_entry_is_written_as_json_line(self, log_dir):
        audit.log_action("delete", "customers", 7, {"reason": "closed"})

        entry = json.loads((log_dir / "audit.log").read_text().splitlines()[-1])
        assert entry["action"] == "DELETE"
        assert entry["resource_type"] == "customers"
        assert entry["resource_id"] == "7"
        assert entry["status"] == "success"
        assert entry["details"] == {"reason": "closed"}

    def test_other_handlers_do_not_replace_the_file(self, log_dir):
        stream = logging.NullHandler()
        audit.audit_logger.addHandler(stream)
        try:
            audit.log_action("commit", "ledger", 1)
        finally:
            audit.audit_logger.removeHandler(stream)

        entry = json.loads((log_dir / "audit.log").read_text().splitlines()[-1])
        assert entry["action"] == "COMMIT"

    def test_file_handler_is_attached_once(self, log_dir):
        audit.log_action("refresh", "service_plan_usage_summary", "a")
        audit.log_action("refresh", "service_plan_usage_summary", "b")

        assert len(_file_handlers()) == 1
        assert len((log_dir / "audit.log").read_text().splitlines()) == 2

    def test_handler_follows_log_dir(self, log_dir, tmp_path, monkeypatch):
        audit.log_action("delete", "customers", 1)

        moved = tmp_path / "moved"
        monkeypatch.setenv("LOG_DIR", str(moved))
        audit.log_action("delete", "customers", 2)

        assert len(_file_handlers()) == 1
        assert len((log_dir / "audit.log").read_text().splitlines()) == 1
        entry = json.loads((moved / "audit.log").read_text().splitlines()[-1])
        assert entry["resource_id"] == "2"
