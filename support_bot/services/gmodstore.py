from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Set

import httpx

from ..config.settings import Settings
from ..models import Coupon, CouponBuilder, LinkedAccount, utcnow
from .errors import StoreServiceError
from .link import USER_AGENT

logger = logging.getLogger(__name__)


def _json(r: httpx.Response, what: str) -> Dict[str, Any]:
    try:
        payload = r.json()
    except ValueError as exc:
        raise StoreServiceError(f"{what}: response is not JSON") from exc
    if not isinstance(payload, dict):
        raise StoreServiceError(f"{what}: unexpected response format")
    return payload


class GmodStoreClient:
    """
    Client for the GmodStore v3 coupon endpoints.
    """

    def __init__(
        self,
        token: str,
        base_url: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "User-Agent": USER_AGENT,
            },
            transport=transport,
        )

    @classmethod
    def from_settings(cls, s: Settings) -> "GmodStoreClient":
        return cls(s.gms_pat, s.gms_api_base)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, path: str, what: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            r = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise StoreServiceError(f"{what}: error contacting GmodStore ({exc})") from exc
        if r.is_error:
            raise StoreServiceError(f"{what}: HTTP {r.status_code}")
        return _json(r, what)

    async def active_coupon(
        self,
        account: LinkedAccount,
        product_id: str,
        *,
        now: Optional[datetime] = None,
    ) -> Optional[Coupon]:
        """
        First unexpired coupon bound to the account's store user, or None.

        The API does not filter on expiry, so every page is checked client-side
        against a single clock reading. Ties follow the API's order.
        """
        store_id = account.gmod_store_id
        if not store_id:
            raise StoreServiceError(f"Account {account.uuid} has no GmodStore id")

        ref = now or utcnow()
        what = f"Failed to list coupons for product {product_id}"
        path = f"/products/{product_id}/coupons"
        params: Dict[str, str] = {"filter[boundUserId]": store_id}
        seen: Set[str] = set()

        while True:
            payload = await self._send("GET", path, what, params=params)

            for raw in payload.get("data") or []:
                try:
                    coupon = Coupon.model_validate(raw)
                except ValueError as exc:
                    raise StoreServiceError(f"{what}: malformed coupon object") from exc
                if coupon.bound_user == store_id and coupon.is_active(ref):
                    return coupon

            cursor = (payload.get("cursors") or {}).get("next")
            if not cursor or cursor in seen:
                return None
            seen.add(cursor)
            params = {"filter[boundUserId]": store_id, "cursor": cursor}

    async def create_coupon(self, product_id: str, builder: CouponBuilder) -> Coupon:
        what = f"Failed to create coupon for product {product_id}"
        payload = await self._send(
            "POST",
            f"/products/{product_id}/coupons",
            what,
            json=builder.to_payload(),
        )
        try:
            coupon = Coupon.model_validate(payload.get("data"))
        except ValueError as exc:
            raise StoreServiceError(f"{what}: malformed coupon object") from exc

        logger.info("Created coupon %s for product %s (bound=%s)", coupon.id, product_id, coupon.bound_user)
        return coupon
