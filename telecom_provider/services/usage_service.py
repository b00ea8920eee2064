# telecom_provider/services/usage_service.py
"""
Usage recording. Every event is attached to a time dimension row, created
on first use of its timestamp.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List

from sqlmodel import Session, select

from ..core.constants import PartOfDay, UsageType
from ..models import TimeDimension, UsageData
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)


def part_of_day(moment: datetime) -> PartOfDay:
    """morning 05-12, afternoon 12-18, evening 18-21, night 21-05."""
    hour = moment.hour
    if 5 <= hour < 12:
        return PartOfDay.MORNING
    if 12 <= hour < 18:
        return PartOfDay.AFTERNOON
    if 18 <= hour < 21:
        return PartOfDay.EVENING
    return PartOfDay.NIGHT


class UsageService(BaseCRUDService[UsageData]):
    def __init__(self, session: Session):
        super().__init__(session, UsageData)
        self.time_service = BaseCRUDService(session, TimeDimension)

    def get_or_create_time(self, moment: datetime) -> TimeDimension:
        statement = select(TimeDimension).where(TimeDimension.full_timestamp == moment)
        existing = self.session.exec(statement).first()
        if existing:
            return existing
        return self.time_service.create(
            {
                "full_timestamp": moment,
                "day_of_week": moment.strftime("%A"),
                "part_of_day": part_of_day(moment),
            }
        )

    def record_usage(
        self,
        subscription_id: int,
        network_element_id: int,
        usage_type: UsageType,
        amount: Decimal,
        moment: datetime,
    ) -> UsageData:
        """
        Record one usage event. `amount` is minutes (call), a count (sms)
        or megabytes (data).
        """
        time_row = self.get_or_create_time(moment)
        return self.create(
            {
                "usage_type": usage_type,
                "amount": amount,
                "subscription_id": subscription_id,
                "network_element_id": network_element_id,
                "time_id": time_row.id,
            }
        )

    def get_usage_for_subscription(self, subscription_id: int) -> List[UsageData]:
        statement = (
            select(UsageData)
            .join(TimeDimension, TimeDimension.id == UsageData.time_id)
            .where(UsageData.subscription_id == subscription_id)
            .order_by(TimeDimension.full_timestamp)
        )
        return list(self.session.exec(statement).all())
