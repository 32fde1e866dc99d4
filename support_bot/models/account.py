from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LinkedAccount(BaseModel):
    """
    A Discord account linked to a store account.

    Created by the link service; the bot only reads or deletes it.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    uuid: str
    name: Optional[str] = None
    steam_id: int = Field(alias="steamId")
    discord_id: Optional[int] = Field(default=None, alias="discordId")
    gmod_store_id: Optional[str] = Field(default=None, alias="gmodStoreId")
    avatar: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class PurchaseFlags(BaseModel):
    """Product entitlements for one linked account (snapshot, never cached)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Required: a body missing any key is malformed.
    lsac: bool = Field(alias="LSAC")
    swift_ac: bool = Field(alias="SwiftAC")
    hit_reg: bool = Field(alias="HitReg")
    screen_grabs: bool = Field(alias="ScreenGrabs")
    workshop_dl: bool = Field(alias="WorkshopDL")
    sexy_errors: bool = Field(alias="SexyErrors")
