from frostwatch.models.subscription import Subscription

__all__ = ["Subscription"]
