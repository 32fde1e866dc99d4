from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..models import PurchaseFlags


@dataclass(frozen=True)
class Product:
    flag: str  # attribute on PurchaseFlags
    label: str
    role_id: int


# Deterministic order: role fan-out and the purchases embed both follow it.
PRODUCTS: Sequence[Product] = (
    Product("lsac", "Ley's Server-Side AntiCheat", 884061162482847765),
    Product("swift_ac", "SwiftAC", 884060408946757663),
    Product("hit_reg", "Ley's HitReg", 884060954294386698),
    Product("screen_grabs", "Ley's Screengrabs", 889306784551026780),
    Product("workshop_dl", "Ley WorkshopDL", 884060628128497716),
    Product("sexy_errors", "Ley Sexy Errors", 884060823205609473),
)

# Granted on join to members with a linked account.
VERIFIED_ROLE_ID = 884063960582721597

# GmodStore product id for LSAC (the /coupon target).
LSAC_PRODUCT_ID = "6c5e862b-3dcf-4769-aa6b-8a001937c56b"

LINK_URL = "https://leystryku.support/"


def owned(flags: PurchaseFlags) -> List[Product]:
    return [p for p in PRODUCTS if getattr(flags, p.flag)]


def roles_for(flags: PurchaseFlags) -> List[int]:
    """Role ids for every owned product, in catalog order."""
    return [p.role_id for p in owned(flags)]


def flag_glyph(value: bool) -> str:
    return "✅" if value else "❌"


__all__ = [
    "Product",
    "PRODUCTS",
    "VERIFIED_ROLE_ID",
    "LSAC_PRODUCT_ID",
    "LINK_URL",
    "owned",
    "roles_for",
    "flag_glyph",
]
