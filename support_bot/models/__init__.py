# Wire models for the link service and the GmodStore coupon API.

from .account import LinkedAccount, PurchaseFlags
from .coupon import COUPON_TTL_DAYS, Coupon, CouponBuilder, utcnow

__all__ = [
    "LinkedAccount",
    "PurchaseFlags",
    "COUPON_TTL_DAYS",
    "Coupon",
    "CouponBuilder",
    "utcnow",
]
