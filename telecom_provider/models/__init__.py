from .billing import Billing
from .customer import Customer
from .location import Location
from .network import Employee, NetworkElement
from .payment import Payment
from .plan import ServicePlan
from .promotion import Promotion
from .subscription import Subscription, SubscriptionPromotion
from .support import CustomerSupport
from .transaction import Transaction
from .usage import TimeDimension, UsageData
from .usage_summary import ServicePlanUsageSummary
