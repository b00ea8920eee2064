# telecom_provider/core/audit.py
"""
Centralized audit logging for destructive or financially relevant actions.
Deletes, identity renumbering, ledger commits and snapshot refreshes are
written as JSON lines to a dedicated file for later review.
"""
import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional

from .config import get_log_dir

AUDIT_LOG_NAME = "audit.log"

# Dedicated audit logger; the file handler is attached on first use so that
# importing the package never touches the filesystem.
audit_logger = logging.getLogger("audit")
audit_logger.setLevel(logging.INFO)
audit_logger.propagate = False  # Don't duplicate to root logger


def _ensure_handler() -> None:
    """Attach the audit file handler for the current LOG_DIR unless it is already present."""
    log_dir = get_log_dir()
    path = os.path.abspath(os.path.join(log_dir, AUDIT_LOG_NAME))
    for handler in list(audit_logger.handlers):
        if not isinstance(handler, logging.FileHandler):
            continue
        if handler.baseFilename == path:
            return
        if os.path.basename(handler.baseFilename) == AUDIT_LOG_NAME:
            # LOG_DIR moved since the handler was attached
            audit_logger.removeHandler(handler)
            handler.close()
    os.makedirs(log_dir, exist_ok=True)
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    audit_logger.addHandler(file_handler)


def log_action(
    action: str,
    resource_type: str,
    resource_id: str,
    details: Optional[dict] = None,
    status: str = "success",
) -> None:
    """
    Log an auditable action.

    Args:
        action: The action performed (e.g., "DELETE", "RENUMBER", "COMMIT")
        resource_type: Table or aggregate affected (e.g., "subscriptions", "ledger")
        resource_id: Identifier of the affected resource
        details: Additional context dictionary (optional)
        status: "success" or "failure"
    """
    _ensure_handler()

    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action.upper(),
        "resource_type": resource_type,
        "resource_id": str(resource_id),
        "status": status,
    }

    if details:
        log_entry["details"] = details

    # Write as JSON line
    audit_logger.info(json.dumps(log_entry, ensure_ascii=False, default=str))
