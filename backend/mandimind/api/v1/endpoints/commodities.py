"""
Commodity catalog endpoint.

WHAT: List tradeable commodities with localized names
WHY: Client builds the commodity picker from this
HOW: Read static catalog, localize display name
"""

from fastapi import APIRouter
from typing import List

from ....data.commodities import get_all_commodities
from ....models.api_schemas import CommodityInfo
from ....models.negotiation import Language

router = APIRouter()


@router.get("/commodities", response_model=List[CommodityInfo])
async def list_commodities(language: Language = "en"):
    return [
        CommodityInfo(
            commodity_id=c.commodity_id,
            name=c.name_in(language),
            names=c.names,
            base_price=c.base_price,
            unit=c.unit,
            emoji=c.emoji,
        )
        for c in get_all_commodities()
    ]
