from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .. import __version__
from ..config.settings import Settings
from ..models import LinkedAccount, PurchaseFlags
from .errors import LinkServiceError

logger = logging.getLogger(__name__)

USER_AGENT = f"leystryku-support-bot/{__version__}"


def _data(r: httpx.Response, what: str) -> Dict[str, Any]:
    """
    Unwrap the {"data": {...}} envelope used by the link service.
    """
    try:
        payload = r.json()
    except ValueError as exc:
        raise LinkServiceError(f"{what}: response is not JSON") from exc
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        raise LinkServiceError(f"{what}: response has no data object")
    return data


class LinkClient:
    """
    Client for the account link service.

    One instance is built at startup and shared by every handler.
    No retries, no caching; httpx default timeouts apply.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
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
    def from_settings(cls, s: Settings) -> "LinkClient":
        return cls(s.api_endpoint, s.api_token)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, what: str) -> httpx.Response:
        try:
            return await self._client.request(method, path)
        except httpx.HTTPError as exc:
            raise LinkServiceError(f"{what}: error contacting link service ({exc})") from exc

    async def lookup(self, discord_id: int) -> Optional[LinkedAccount]:
        """
        Return the linked account for a Discord user id, or None if not linked.
        """
        what = f"Failed to look up discord user {discord_id}"
        r = await self._request("GET", f"/api/users/discord/{discord_id}", what)
        if r.status_code == 404:
            return None
        if r.is_error:
            raise LinkServiceError(f"{what}: HTTP {r.status_code}")

        try:
            return LinkedAccount.model_validate(_data(r, what))
        except ValueError as exc:
            raise LinkServiceError(f"{what}: malformed user object") from exc

    async def purchases(self, account: LinkedAccount) -> PurchaseFlags:
        what = f"Failed to fetch purchases for {account.uuid}"
        r = await self._request("GET", f"/api/users/{account.uuid}/purchases", what)
        if r.is_error:
            raise LinkServiceError(f"{what}: HTTP {r.status_code}")

        try:
            return PurchaseFlags.model_validate(_data(r, what))
        except ValueError as exc:
            raise LinkServiceError(f"{what}: malformed purchases object") from exc

    async def unlink(self, discord_id: int) -> bool:
        """
        Delete the link for a Discord user id.
        Returns False (and issues no delete) when the user was never linked.
        """
        account = await self.lookup(discord_id)
        if account is None:
            return False

        what = f"Failed to delete link {account.uuid}"
        r = await self._request("DELETE", f"/api/users/{account.uuid}", what)
        if r.is_error:
            raise LinkServiceError(f"{what}: HTTP {r.status_code}")

        logger.info("Unlinked discord user %s (link %s)", discord_id, account.uuid)
        return True
