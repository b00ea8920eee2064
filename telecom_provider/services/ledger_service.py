# telecom_provider/services/ledger_service.py
"""
Staged writes to the transaction ledger.

A TransactionLedger collects ledger entries in memory. Named savepoints mark
positions in that log; rolling back to a savepoint discards every entry
staged after it (the savepoint itself survives, as in SQL). Nothing reaches
the database until commit(), which validates every surviving entry and
flushes all of them in one database transaction.

    with TransactionLedger(session) as ledger:
        ledger.stage({...})                # A
        ledger.savepoint("after_first")
        ledger.stage({...})                # B, turns out to be invalid
        ledger.rollback_to("after_first")  # B discarded, A kept
        ledger.stage({...})                # C
        ledger.commit()                    # persists A and C

Leaving the block without commit() discards the whole log.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError
from sqlmodel import Session

from ..core.audit import log_action
from ..core.exceptions import ConstraintViolationError, LedgerStateError
from ..models import Transaction
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)


@dataclass
class StagedEntry:
    position: int
    data: Dict[str, Any]
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class TransactionLedger:
    def __init__(self, session: Session):
        self.session = session
        self._service = BaseCRUDService(session, Transaction)
        self._log: List[StagedEntry] = []
        # (name, log length when the savepoint was taken), oldest first
        self._savepoints: List[Tuple[str, int]] = []
        self._closed = False

    def __enter__(self) -> "TransactionLedger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._closed:
            if self._log:
                logger.info(f"Ledger left without commit; discarding {len(self._log)} staged entries")
            self.rollback()

    @property
    def staged(self) -> List[StagedEntry]:
        return list(self._log)

    @property
    def savepoints(self) -> List[str]:
        return [name for name, _ in self._savepoints]

    def stage(self, data: Dict[str, Any]) -> StagedEntry:
        """
        Append an entry to the log. The entry is checked immediately and the
        outcome recorded on it, but an invalid entry is still staged: the
        caller decides whether to roll it back.
        """
        self._ensure_open()
        entry = StagedEntry(position=len(self._log), data=dict(data))
        entry.errors = self._check(entry.data)
        if entry.errors:
            logger.warning(f"Staged ledger entry #{entry.position} is invalid: {entry.errors}")
        self._log.append(entry)
        return entry

    def savepoint(self, name: str) -> None:
        """Mark the current end of the log. Re-using a name moves it here."""
        self._ensure_open()
        self._savepoints = [sp for sp in self._savepoints if sp[0] != name]
        self._savepoints.append((name, len(self._log)))

    def rollback_to(self, name: str) -> List[StagedEntry]:
        """
        Discard entries staged after `name`, and every savepoint taken after
        it. Returns the discarded entries.
        """
        self._ensure_open()
        index = self._find_savepoint(name)
        _, mark = self._savepoints[index]
        discarded = self._log[mark:]
        del self._log[mark:]
        del self._savepoints[index + 1:]
        logger.info(f"Rolled back to savepoint '{name}': discarded {len(discarded)} entries")
        return discarded

    def release(self, name: str) -> None:
        """Forget `name` and every later savepoint; staged entries are kept."""
        self._ensure_open()
        index = self._find_savepoint(name)
        del self._savepoints[index:]

    def invalid_entries(self) -> List[StagedEntry]:
        return [entry for entry in self._log if not entry.is_valid]

    def commit(self) -> List[Transaction]:
        """
        Persist every staged entry atomically.

        Raises:
            ConstraintViolationError: an entry is invalid; nothing is written
                and the log is left as is so the caller can roll back.
        """
        self._ensure_open()
        invalid = self.invalid_entries()
        if invalid:
            first = invalid[0]
            raise ConstraintViolationError(
                "transactions",
                f"Ledger entry #{first.position} is invalid: {'; '.join(first.errors)}",
            )

        records = []
        for entry in self._log:
            record = self._service.validate_payload(entry.data)
            self._service.check_parents(record)
            records.append(record)

        self.session.add_all(records)
        self._service.commit_changes()
        for record in records:
            self.session.refresh(record)

        self._closed = True
        log_action(
            "COMMIT",
            "transactions",
            ",".join(str(record.id) for record in records),
            {"entries": len(records)},
        )
        logger.info(f"Ledger committed {len(records)} entries")
        self._log.clear()
        self._savepoints.clear()
        return records

    def rollback(self) -> None:
        """Discard the whole log and close the ledger."""
        self._log.clear()
        self._savepoints.clear()
        self._closed = True

    # --- helpers ---

    def _check(self, data: Dict[str, Any]) -> List[str]:
        try:
            Transaction.model_validate(data)
        except ValidationError as e:
            return [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
        return []

    def _find_savepoint(self, name: str) -> int:
        for index in range(len(self._savepoints) - 1, -1, -1):
            if self._savepoints[index][0] == name:
                return index
        raise LedgerStateError(f"Savepoint '{name}' does not exist")

    def _ensure_open(self) -> None:
        if self._closed:
            raise LedgerStateError("Ledger is already committed or rolled back")
