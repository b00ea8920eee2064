# telecom_provider/services/base_service.py
"""
BaseCRUDService: Generic service class for standard CRUD operations.

Every write goes through the same steps:
1. Reject writes to generated columns.
2. Validate the payload against the model (enums, patterns, ranges).
3. Check that every referenced parent exists, using the policy table.
4. Commit, translating engine errors into domain errors after a rollback.

Deletes consult the policy table first and refuse when a RESTRICT
relationship still has dependent rows.
"""
import logging
import re
from typing import Any, Dict, Generic, List, Type, TypeVar

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from ..core.audit import log_action
from ..core.constants import ReferentialAction
from ..core.exceptions import (
    ConstraintViolationError,
    ForeignKeyViolationError,
    GeneratedColumnError,
    NotFoundError,
    RestrictedDeleteError,
    RestrictedUpdateError,
)
from ..db.policies import ForeignKeyPolicy, policies_for_child, policies_for_parent
from ..models.billing import GENERATED_COLUMNS

logger = logging.getLogger(__name__)

# Generic type for SQLModel models
ModelType = TypeVar("ModelType", bound=SQLModel)

_SQLITE_CONSTRAINT_MESSAGE = re.compile(
    r"(?P<kind>UNIQUE|CHECK|NOT NULL|FOREIGN KEY) constraint failed(?::\s*(?P<target>.+))?"
)


def translate_integrity_error(error: IntegrityError) -> ConstraintViolationError:
    """Map an engine IntegrityError to a domain error naming the failed constraint."""
    message = str(error.orig)
    match = _SQLITE_CONSTRAINT_MESSAGE.search(message)
    if not match:
        return ConstraintViolationError("unknown", message)

    kind = match.group("kind")
    target = (match.group("target") or "").strip()
    if kind == "FOREIGN KEY":
        return ForeignKeyViolationError(target or "foreign_key", message)
    return ConstraintViolationError(target or kind.lower(), message)


class BaseCRUDService(Generic[ModelType]):
    """
    Base class providing generic CRUD (Create, Read, Update, Delete) operations.

    Usage:
        class MyService(BaseCRUDService[MyModel]):
            def __init__(self, session: Session):
                super().__init__(session, MyModel)
    """

    def __init__(self, session: Session, model: Type[ModelType]):
        """
        Initialize the service with a database session and model class.

        Args:
            session: SQLModel database session.
            model: The SQLModel class this service manages.
        """
        self.session = session
        self.model = model

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def get_all(self) -> List[ModelType]:
        """Retrieve all records of the model."""
        statement = select(self.model)
        return list(self.session.exec(statement).all())

    def get_by_id(self, id: Any) -> ModelType:
        """
        Retrieve a single record by its primary key.

        Raises:
            NotFoundError: if no record has that key.
        """
        record = self.session.get(self.model, id)
        if record is None:
            raise NotFoundError(self.model.__name__, id)
        return record

    def create(self, data: Dict[str, Any]) -> ModelType:
        """
        Validate and insert a new record.

        Raises:
            ConstraintViolationError: the payload breaks a column rule.
            ForeignKeyViolationError: a referenced parent does not exist.
        """
        data = self._prepare(dict(data))
        self._reject_generated(data)
        record = self.validate_payload(data)
        self.check_parents(record)

        self.session.add(record)
        self.commit_changes()
        self.session.refresh(record)
        logger.debug(f"{self.model.__name__} created: {record}")
        return record

    def update(self, id: Any, data: Dict[str, Any]) -> ModelType:
        """
        Update an existing record. Primary keys are changed with renumber().

        The full resulting row is validated before anything is written.
        """
        if not data:
            raise ValueError("No fields to update provided.")
        self._reject_generated(data)
        if "id" in data:
            raise ConstraintViolationError(
                f"{self.table_name}.id", "Use renumber() to change a primary key"
            )
        for key in data:
            if key not in self.model.model_fields:
                raise ConstraintViolationError(
                    f"{self.table_name}.{key}", f"Unknown column '{key}'"
                )

        record = self.get_by_id(id)
        current = record.model_dump(exclude=set(GENERATED_COLUMNS))
        merged = self._prepare({**current, **data})
        validated = self.validate_payload(merged)
        self.check_parents(validated)

        for key in merged:
            setattr(record, key, getattr(validated, key))

        self.session.add(record)
        self.commit_changes()
        self.session.refresh(record)
        return record

    def delete(self, id: Any) -> None:
        """
        Delete a record by its primary key.

        Raises:
            NotFoundError: if not found.
            RestrictedDeleteError: a RESTRICT relationship still has dependents.
        """
        record = self.get_by_id(id)
        for policy in policies_for_parent(self.table_name):
            if policy.on_delete is not ReferentialAction.RESTRICT:
                continue
            dependents = self._count_dependents(policy, getattr(record, policy.parent_column))
            if dependents:
                log_action(
                    "DELETE", self.table_name, id, {"blocked_by": policy.name}, status="failure"
                )
                raise RestrictedDeleteError(
                    policy.name, self.table_name, policy.child_table, dependents
                )

        self.session.delete(record)
        self.commit_changes()
        log_action("DELETE", self.table_name, id)
        logger.info(f"{self.model.__name__} {id} deleted")

    def renumber(self, old_id: int, new_id: int) -> ModelType:
        """
        Change the primary key of a record.
        Children under an ON UPDATE CASCADE policy follow the new key; a
        RESTRICT child with rows blocks the change.
        """
        record = self.get_by_id(old_id)
        if self.session.get(self.model, new_id) is not None:
            raise ConstraintViolationError(
                f"{self.table_name}.id", f"{self.model.__name__} {new_id} already exists"
            )

        for policy in policies_for_parent(self.table_name):
            if policy.on_update is not ReferentialAction.RESTRICT:
                continue
            dependents = self._count_dependents(policy, old_id)
            if dependents:
                raise RestrictedUpdateError(
                    policy.name, self.table_name, policy.child_table, dependents
                )

        record.id = new_id
        self.session.add(record)
        self.commit_changes()
        log_action("RENUMBER", self.table_name, old_id, {"new_id": new_id})
        return self.get_by_id(new_id)

    # --- Hooks & helpers ---

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Override to normalize a payload before validation."""
        return data

    def _reject_generated(self, data: Dict[str, Any]) -> None:
        for column in GENERATED_COLUMNS:
            if column in data and column in self.model.model_fields:
                raise GeneratedColumnError(column)

    def validate_payload(self, data: Dict[str, Any]) -> ModelType:
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise ConstraintViolationError(
                f"{self.table_name}.{field}" if field else self.table_name,
                f"Invalid {self.model.__name__}: {field} {error['msg']}",
            ) from e

    def check_parents(self, record: ModelType) -> None:
        for policy in policies_for_child(self.table_name):
            value = getattr(record, policy.child_column, None)
            if value is None:
                continue
            parent = SQLModel.metadata.tables[policy.parent_table]
            key = parent.c[policy.parent_column]
            if self.session.exec(select(key).where(key == value)).first() is None:
                raise ForeignKeyViolationError(
                    policy.name,
                    f"{self.table_name}.{policy.child_column}={value} references a "
                    f"missing {policy.target}",
                )

    def _count_dependents(self, policy: ForeignKeyPolicy, value: Any) -> int:
        child = SQLModel.metadata.tables[policy.child_table]
        statement = (
            select(func.count())
            .select_from(child)
            .where(child.c[policy.child_column] == value)
        )
        return self.session.exec(statement).one()

    def commit_changes(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            error = translate_integrity_error(e)
            logger.warning(f"{self.model.__name__} write rejected: {error}")
            raise error from e
