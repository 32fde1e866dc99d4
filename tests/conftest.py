from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from unittest.mock import AsyncMock, MagicMock

import discord
import httpx
import pytest

from support_bot.services import GmodStoreClient, LinkClient

LINK_BASE = "https://link.test"
GMS_BASE = "https://gms.test/api/v3"

Route = Union[Tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class FakeApi:
    """
    Minimal in-process REST collaborator for httpx.MockTransport.
    Unknown routes answer 404, which the link client reads as "not linked".
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Route] = {}

    def add(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self.routes[(method.upper(), path)] = (status, json)

    def add_handler(self, method: str, path: str, fn: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method.upper(), path)] = fn

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def calls(self, method: Optional[str] = None) -> List[httpx.Request]:
        if method is None:
            return list(self.requests)
        return [r for r in self.requests if r.method == method.upper()]


def user_payload(discord_id: int = 42, *, uuid: str = "u-1", gms_id: Optional[str] = "gms-1") -> Dict[str, Any]:
    return {
        "data": {
            "uuid": uuid,
            "name": "Player",
            "steamId": 76561198000000000,
            "discordId": discord_id,
            "gmodStoreId": gms_id,
            "avatar": None,
            "createdAt": "2023-01-01T00:00:00Z",
            "updatedAt": "2023-01-02T00:00:00Z",
        }
    }


def purchases_payload(**flags: bool) -> Dict[str, Any]:
    names = {
        "lsac": "LSAC",
        "swift_ac": "SwiftAC",
        "hit_reg": "HitReg",
        "screen_grabs": "ScreenGrabs",
        "workshop_dl": "WorkshopDL",
        "sexy_errors": "SexyErrors",
    }
    return {"data": {wire: bool(flags.get(attr, False)) for attr, wire in names.items()}}


def coupon_payload(
    *,
    id: str = "c-1",
    code: str = "EXISTING",
    bound_user: Optional[str] = "gms-1",
    expires_at: str = "2099-01-01T00:00:00Z",
) -> Dict[str, Any]:
    return {
        "id": id,
        "code": code,
        "percent": 25,
        "maxUses": 1,
        "boundUser": bound_user,
        "expiresAt": expires_at,
        "createdAt": "2023-01-01T00:00:00Z",
        "updatedAt": "2023-01-01T00:00:00Z",
    }


def link_user(api: FakeApi, discord_id: int = 42, *, uuid: str = "u-1", gms_id: Optional[str] = "gms-1", **flags: bool) -> None:
    api.add("GET", f"/api/users/discord/{discord_id}", json=user_payload(discord_id, uuid=uuid, gms_id=gms_id))
    api.add("GET", f"/api/users/{uuid}/purchases", json=purchases_payload(**flags))


@pytest.fixture
def link_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def store_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def link_client(link_api: FakeApi) -> LinkClient:
    return LinkClient(LINK_BASE, "link-token", transport=link_api.transport)


@pytest.fixture
def store_client(store_api: FakeApi) -> GmodStoreClient:
    return GmodStoreClient("gms-token", GMS_BASE, transport=store_api.transport)


@pytest.fixture
def bot(link_client: LinkClient, store_client: GmodStoreClient) -> SimpleNamespace:
    return SimpleNamespace(link=link_client, store=store_client)


def make_user(user_id: int = 42, *, member: bool = True) -> MagicMock:
    user = MagicMock(spec=discord.Member if member else discord.User)
    user.id = user_id
    user.mention = f"<@{user_id}>"
    user.add_roles = AsyncMock()
    user.display_avatar.url = f"https://cdn.test/avatars/{user_id}.png"
    user.__str__.return_value = f"player{user_id}"
    return user


def make_interaction(user: Optional[MagicMock] = None) -> MagicMock:
    interaction = MagicMock()
    interaction.user = user if user is not None else make_user()
    interaction.guild = MagicMock(spec=discord.Guild)
    interaction.response = MagicMock()
    interaction.response.send_message = AsyncMock()
    interaction.command = None
    interaction.data = {"name": "test"}
    return interaction


def sent(interaction: MagicMock) -> Dict[str, Any]:
    """kwargs of the single response sent for an interaction."""
    interaction.response.send_message.assert_awaited_once()
    return interaction.response.send_message.await_args.kwargs
