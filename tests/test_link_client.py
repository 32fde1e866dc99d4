import httpx
import pytest

from conftest import link_user, purchases_payload, user_payload
from support_bot.models import LinkedAccount
from support_bot.services import LinkClient, LinkServiceError


@pytest.mark.asyncio
async def test_lookup_returns_account(link_api, link_client):
    link_api.add("GET", "/api/users/discord/42", json=user_payload(42, gms_id="gms-9"))

    account = await link_client.lookup(42)

    assert isinstance(account, LinkedAccount)
    assert account.uuid == "u-1"
    assert account.discord_id == 42
    assert account.gmod_store_id == "gms-9"
    assert account.steam_id == 76561198000000000


@pytest.mark.asyncio
async def test_lookup_sends_bearer_token(link_api, link_client):
    link_api.add("GET", "/api/users/discord/42", json=user_payload(42))

    await link_client.lookup(42)

    (request,) = link_api.calls()
    assert request.headers["Authorization"] == "Bearer link-token"
    assert str(request.url) == "https://link.test/api/users/discord/42"


@pytest.mark.asyncio
async def test_lookup_not_found_is_none(link_api, link_client):
    assert await link_client.lookup(42) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 401, 500, 503])
async def test_lookup_other_errors_raise(link_api, link_client, status):
    link_api.add("GET", "/api/users/discord/42", status=status, json={"error": "nope"})

    with pytest.raises(LinkServiceError, match=f"HTTP {status}"):
        await link_client.lookup(42)


@pytest.mark.asyncio
async def test_lookup_transport_error_raises():
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = LinkClient("https://link.test", "t", transport=httpx.MockTransport(boom))
    with pytest.raises(LinkServiceError) as excinfo:
        await client.lookup(42)
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_lookup_malformed_body_raises(link_api, link_client):
    link_api.add("GET", "/api/users/discord/42", json={"data": {"uuid": "u-1"}})

    with pytest.raises(LinkServiceError, match="malformed"):
        await link_client.lookup(42)


@pytest.mark.asyncio
async def test_purchases(link_api, link_client):
    link_user(link_api, 42, swift_ac=True, hit_reg=True)
    account = await link_client.lookup(42)

    flags = await link_client.purchases(account)

    assert flags.swift_ac and flags.hit_reg
    assert not (flags.lsac or flags.screen_grabs or flags.workshop_dl or flags.sexy_errors)


@pytest.mark.asyncio
async def test_purchases_error_raises(link_api, link_client):
    link_api.add("GET", "/api/users/discord/42", json=user_payload(42))
    link_api.add("GET", "/api/users/u-1/purchases", status=500, json=purchases_payload())
    account = await link_client.lookup(42)

    with pytest.raises(LinkServiceError):
        await link_client.purchases(account)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"data": {"unexpected": 1}},
        {"data": {"LSAC": True, "SwiftAC": True, "HitReg": False, "ScreenGrabs": False, "WorkshopDL": False}},
    ],
)
async def test_purchases_malformed_body_raises(link_api, link_client, body):
    link_api.add("GET", "/api/users/discord/42", json=user_payload(42))
    link_api.add("GET", "/api/users/u-1/purchases", json=body)
    account = await link_client.lookup(42)

    with pytest.raises(LinkServiceError, match="malformed purchases"):
        await link_client.purchases(account)


@pytest.mark.asyncio
async def test_unlink_existing(link_api, link_client):
    link_user(link_api, 42)
    link_api.add("DELETE", "/api/users/u-1", status=204)

    assert await link_client.unlink(42) is True

    (delete,) = link_api.calls("DELETE")
    assert delete.url.path == "/api/users/u-1"


@pytest.mark.asyncio
async def test_unlink_never_linked_only_looks_up(link_api, link_client):
    assert await link_client.unlink(42) is False
    assert await link_client.unlink(42) is False

    assert link_api.calls("DELETE") == []
    assert [r.method for r in link_api.calls()] == ["GET", "GET"]


@pytest.mark.asyncio
async def test_unlink_delete_failure_raises(link_api, link_client):
    link_user(link_api, 42)
    link_api.add("DELETE", "/api/users/u-1", status=500)

    with pytest.raises(LinkServiceError, match="delete"):
        await link_client.unlink(42)
