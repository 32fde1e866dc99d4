from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Lifetime of coupons created by the bot. Replies quote this value.
COUPON_TTL_DAYS = 7


def utcnow() -> datetime:
    # timezone-aware UTC; coupon expiry comparisons depend on it
    return datetime.now(timezone.utc)


def _default_expiry() -> datetime:
    return utcnow().replace(microsecond=0) + timedelta(days=COUPON_TTL_DAYS)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


class Coupon(BaseModel):
    """A GmodStore coupon as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    code: str
    percent: int
    max_uses: int = Field(alias="maxUses")
    bound_user: Optional[str] = Field(default=None, alias="boundUser")
    expires_at: datetime = Field(alias="expiresAt")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """True only while the expiry is strictly in the future."""
        ref = _as_utc(now) if now is not None else utcnow()
        return _as_utc(self.expires_at) > ref


class CouponBuilder(BaseModel):
    """
    Validated payload for coupon creation.

    Constraints are enforced at construction; an invalid builder raises
    pydantic.ValidationError and is never returned:
      - 0 < percent <= 90
      - 0 < max_uses <= 100
      - 1 <= len(code) <= 64
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    code: str = Field(min_length=1, max_length=64)
    percent: int = Field(gt=0, le=90)
    max_uses: int = Field(gt=0, le=100, alias="maxUses")
    bound_user_id: Optional[str] = Field(default=None, alias="boundUserId")
    expires_at: datetime = Field(default_factory=_default_expiry, alias="expiresAt")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
