"""
Commodity catalog.

WHAT: 18 agricultural commodities with names in five languages
WHY: Sessions derive their market price from a commodity's base price
HOW: Static list of frozen Commodity models; base prices in rupees per unit
"""

from ..models.negotiation import Commodity
from ..utils.exceptions import CommodityNotFoundException


def _commodity(commodity_id: str, en: str, hi: str, te: str, ta: str, bn: str,
               base_price: int, unit: str, emoji: str) -> Commodity:
    return Commodity(
        commodity_id=commodity_id,
        names={"en": en, "hi": hi, "te": te, "ta": ta, "bn": bn},
        base_price=base_price,
        unit=unit,
        emoji=emoji,
    )


COMMODITIES: list[Commodity] = [
    _commodity("rice", "Rice", "चावल", "బియ్యం", "அரிசி", "চাল", 50, "kg", "🌾"),
    _commodity("wheat", "Wheat", "गेहूं", "గోధుమ", "கோதுமை", "গম", 30, "kg", "🌾"),
    _commodity("tomato", "Tomatoes", "टमाटर", "టమోటా", "தக்காளி", "টমেটো", 40, "kg", "🍅"),
    _commodity("onion", "Onions", "प्याज", "ఉల్లిపాయ", "வெங்காயம்", "পেঁয়াজ", 35, "kg", "🧅"),
    _commodity("potato", "Potatoes", "आलू", "బంగాళాదుంప", "உருளைக்கிழங்கு", "আলু", 25, "kg", "🥔"),
    _commodity("mango", "Mangoes", "आम", "మామిడి", "மாம்பழம்", "আম", 80, "kg", "🥭"),
    _commodity("banana", "Bananas", "केला", "అరటి", "வாழைப்பழம்", "কলা", 50, "dozen", "🍌"),
    _commodity("apple", "Apples", "सेब", "ఆపిల్", "ஆப்பிள்", "আপেল", 120, "kg", "🍎"),
    _commodity("milk", "Milk", "दूध", "పాలు", "பால்", "দুধ", 60, "liter", "🥛"),
    _commodity("egg", "Eggs", "अंडे", "గుడ్లు", "முட்டை", "ডিম", 70, "dozen", "🥚"),
    _commodity("chicken", "Chicken", "मुर्गी", "కోడి", "கோழி", "মুরগি", 180, "kg", "🍗"),
    _commodity("lentil", "Lentils", "दाल", "పప్పు", "பருப்பு", "ডাল", 100, "kg", "🫘"),
    _commodity("sugar", "Sugar", "चीनी", "చక్కెర", "சர்க்கரை", "চিনি", 45, "kg", "🍬"),
    _commodity("tea", "Tea", "चाय", "టీ", "தேநீர்", "চা", 400, "kg", "🍵"),
    _commodity("coffee", "Coffee", "कॉफी", "కాఫీ", "காபி", "কফি", 600, "kg", "☕"),
    _commodity("turmeric", "Turmeric", "हल्दी", "పసుపు", "மஞ்சள்", "হলুদ", 150, "kg", "🟡"),
    _commodity("chili", "Chili", "मिर्च", "మిరపకాయ", "மிளகாய்", "মরিচ", 200, "kg", "🌶️"),
    _commodity("coriander", "Coriander", "धनिया", "కొత్తిమీర", "கொத்தமல்லி", "ধনে", 80, "kg", "🌿"),
]

_BY_ID: dict[str, Commodity] = {c.commodity_id: c for c in COMMODITIES}


def get_all_commodities() -> list[Commodity]:
    return list(COMMODITIES)


def find_commodity(commodity_id: str) -> Commodity | None:
    return _BY_ID.get(commodity_id)


def get_commodity_by_id(commodity_id: str) -> Commodity:
    """
    Look up a commodity.

    Raises:
        CommodityNotFoundException: if the id is not in the catalog
    """
    commodity = _BY_ID.get(commodity_id)
    if commodity is None:
        raise CommodityNotFoundException(commodity_id)
    return commodity


def get_commodity_name(commodity: Commodity, language: str) -> str:
    return commodity.name_in(language)
