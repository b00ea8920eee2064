# telecom_provider/services/subscription_service.py
"""
Subscription service: plan subscriptions and applied promotions.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlmodel import Session, select

from ..core.exceptions import ConstraintViolationError
from ..models import Promotion, Subscription, SubscriptionPromotion
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)


class SubscriptionService(BaseCRUDService[Subscription]):
    """
    Deleting a subscription removes its applied promotions (CASCADE) but is
    refused while bills or usage rows reference it (RESTRICT).
    """

    def __init__(self, session: Session):
        super().__init__(session, Subscription)
        self.links = BaseCRUDService(session, SubscriptionPromotion)

    def subscribe(self, data: dict) -> Subscription:
        subscription = self.create(data)
        logger.info(
            f"Customer {subscription.customer_id} subscribed to plan {subscription.plan_id} "
            f"({subscription.start_date} -> {subscription.end_date})"
        )
        return subscription

    def apply_promotion(
        self, subscription_id: int, promotion_id: int, applied_date: Optional[date] = None
    ) -> SubscriptionPromotion:
        """Attach a promotion to a subscription. A pair can be applied only once."""
        if self.session.get(SubscriptionPromotion, (subscription_id, promotion_id)):
            raise ConstraintViolationError(
                "subscription_promotions.pk",
                f"Promotion {promotion_id} already applied to subscription {subscription_id}",
            )
        return self.links.create(
            {
                "subscription_id": subscription_id,
                "promotion_id": promotion_id,
                "applied_date": applied_date or date.today(),
            }
        )

    def get_promotions(self, subscription_id: int) -> List[Promotion]:
        statement = (
            select(Promotion)
            .join(SubscriptionPromotion, SubscriptionPromotion.promotion_id == Promotion.id)
            .where(SubscriptionPromotion.subscription_id == subscription_id)
            .order_by(SubscriptionPromotion.applied_date)
        )
        return list(self.session.exec(statement).all())
