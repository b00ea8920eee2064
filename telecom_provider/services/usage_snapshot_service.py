# telecom_provider/services/usage_snapshot_service.py
"""
Service plan usage snapshots.

Each refresh recomputes the all-time call/data/sms totals of every plan with
recorded usage and appends them as a new generation. Rows are never
updated; readers use latest() to get the newest generation per plan.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ..core.audit import log_action
from ..core.constants import UsageType
from ..models import ServicePlanUsageSummary, Subscription, UsageData
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)


class UsageSnapshotService(BaseCRUDService[ServicePlanUsageSummary]):
    def __init__(self, session: Session):
        super().__init__(session, ServicePlanUsageSummary)

    def _usage_totals_by_plan(self) -> Dict[int, Dict[UsageType, Decimal]]:
        statement = (
            select(Subscription.plan_id, UsageData.usage_type, func.sum(UsageData.amount))
            .join(UsageData, UsageData.subscription_id == Subscription.id)
            .group_by(Subscription.plan_id, UsageData.usage_type)
        )
        totals: Dict[int, Dict[UsageType, Decimal]] = {}
        for plan_id, usage_type, amount in self.session.exec(statement).all():
            totals.setdefault(plan_id, {})[UsageType(usage_type)] = Decimal(amount or 0)
        return totals

    def refresh(self, generated_at: Optional[datetime] = None) -> List[ServicePlanUsageSummary]:
        """
        Append one snapshot row per plan with usage, all stamped with the same
        generation timestamp. Plans without usage get no row.
        """
        generated_at = generated_at or datetime.now()
        zero = Decimal("0")

        rows = []
        for plan_id, totals in sorted(self._usage_totals_by_plan().items()):
            rows.append(
                self.validate_payload(
                    {
                        "plan_id": plan_id,
                        "report_generated_at": generated_at,
                        "total_call_minutes": totals.get(UsageType.CALL, zero),
                        "total_data_mb": totals.get(UsageType.DATA, zero),
                        "total_sms_count": int(totals.get(UsageType.SMS, zero)),
                    }
                )
            )

        self.session.add_all(rows)
        self.commit_changes()
        for row in rows:
            self.session.refresh(row)

        log_action(
            "REFRESH",
            self.table_name,
            generated_at.isoformat(),
            {"plans": [row.plan_id for row in rows]},
        )
        logger.info(f"Usage snapshot {generated_at.isoformat()} stored for {len(rows)} plans")
        return rows

    def latest(self) -> List[ServicePlanUsageSummary]:
        """Most recent snapshot row of every plan, ordered by plan."""
        newest = (
            select(
                ServicePlanUsageSummary.plan_id,
                func.max(ServicePlanUsageSummary.report_generated_at).label("generated_at"),
            )
            .group_by(ServicePlanUsageSummary.plan_id)
            .subquery()
        )
        statement = (
            select(ServicePlanUsageSummary)
            .join(
                newest,
                (newest.c.plan_id == ServicePlanUsageSummary.plan_id)
                & (newest.c.generated_at == ServicePlanUsageSummary.report_generated_at),
            )
            .order_by(ServicePlanUsageSummary.plan_id)
        )
        return list(self.session.exec(statement).all())

    def history(self, plan_id: int) -> List[ServicePlanUsageSummary]:
        """Every generation stored for a plan, newest first."""
        statement = (
            select(ServicePlanUsageSummary)
            .where(ServicePlanUsageSummary.plan_id == plan_id)
            .order_by(ServicePlanUsageSummary.report_generated_at.desc())
        )
        return list(self.session.exec(statement).all())
