"""
Localization lookup for negotiation messages.

WHAT: Flat string tables mapping a message key + language to display text
WHY: Engine components only pick keys and placeholder values; text lives here
HOW: Dict of key -> language -> template (or list of equivalent templates)
"""

from typing import Any

FALLBACK_LANGUAGE = "en"


# Single templates. Placeholders use str.format syntax.
STRINGS: dict[str, dict[str, str]] = {
    # Counterpart opening line when the counterpart is selling (user buys)
    "opening.selling": {
        "en": "Fresh {commodity}! ₹{price}/{unit}",
        "hi": "ताजा {commodity}! ₹{price}/{unit}",
        "te": "తాజా {commodity}! ₹{price}/{unit}",
        "ta": "புதிய {commodity}! ₹{price}/{unit}",
        "bn": "তাজা {commodity}! ₹{price}/{unit}",
    },
    # Counterpart opening line when the counterpart is buying (user sells)
    "opening.buying": {
        "en": "Need {commodity}. ₹{price}/{unit}",
        "hi": "{commodity} चाहिए। ₹{price}/{unit}",
        "te": "{commodity} కావాలి। ₹{price}/{unit}",
        "ta": "{commodity} வேண்டும். ₹{price}/{unit}",
        "bn": "{commodity} দরকার। ₹{price}/{unit}",
    },
    "offer.user": {
        "en": "₹{price}",
    },
    "reply.reject": {
        "en": "₹{offer}? That's not realistic. Market is ₹{market_price}. Try again.",
        "hi": "₹{offer}? ये सही नहीं है। बाजार भाव ₹{market_price}। फिर से बोलो।",
        "te": "₹{offer}? ఇది సరైనది కాదు. మార్కెట్ ₹{market_price}. మళ్ళీ చెప్పండి.",
        "ta": "₹{offer}? இது சரியல்ல. சந்தை ₹{market_price}. மீண்டும் முயற்சி.",
        "bn": "₹{offer}? এটা ঠিক নয়। বাজার ₹{market_price}। আবার বলুন।",
    },
    "reply.accept": {
        "en": "Done! ₹{price} 🤝",
        "hi": "पक्का! ₹{price} 🤝",
        "te": "ఓకే! ₹{price} 🤝",
        "ta": "சரி! ₹{price} 🤝",
        "bn": "ঠিক! ₹{price} 🤝",
    },
    "coach.close": {
        "en": "💡 Close! Split or accept.",
        "hi": "💡 करीब! बीच में मिलें।",
        "te": "💡 దగ్గరలో! మధ్యలో కలవండి।",
        "ta": "💡 நெருக்கம்! நடுவில் சேருங்கள்।",
        "bn": "💡 কাছে! মাঝে মিলুন।",
    },
    "coach.market": {
        "en": "💡 Market: ₹{market_price}. Stay within ±50%",
        "hi": "💡 बाजार: ₹{market_price}. ±50% में रहें",
        "te": "💡 మార్కెట్: ₹{market_price}. ±50% లో ఉండండి",
        "ta": "💡 சந்தை: ₹{market_price}. ±50% இருங்கள்",
        "bn": "💡 বাজার: ₹{market_price}. ±50% থাকুন",
    },
    "error.enter_price": {
        "en": "Please enter a price",
        "hi": "कृपया मूल्य दर्ज करें",
    },
    "error.price_positive": {
        "en": "Price must be greater than 0",
        "hi": "मूल्य 0 से अधिक होना चाहिए",
    },
    "error.price_too_high": {
        "en": "Price too high",
        "hi": "मूल्य बहुत अधिक है",
    },
}

# Equivalent phrasings; callers pick one for variety.
VARIANTS: dict[str, dict[str, list[str]]] = {
    "reply.counter": {
        "en": ["₹{price}?", "Best: ₹{price}", "How about ₹{price}?"],
        "hi": ["₹{price}?", "फाइनल: ₹{price}", "₹{price} चलेगा?"],
        "te": ["₹{price}?", "ఫైనల్: ₹{price}", "₹{price} ఓకేనా?"],
        "ta": ["₹{price}?", "இறுதி: ₹{price}", "₹{price} சரியா?"],
        "bn": ["₹{price}?", "ফাইনাল: ₹{price}", "₹{price} হবে?"],
    },
}


def _pick_language(table: dict[str, Any], language: str):
    if language in table:
        return table[language]
    return table[FALLBACK_LANGUAGE]


def translate(key: str, language: str, **params: Any) -> str:
    """
    Render the template for a key in a language.

    Falls back to English when the language has no entry. Unknown keys
    raise KeyError: a missing key is a programming error, not user input.
    """
    if key in VARIANTS:
        template = _pick_language(VARIANTS[key], language)[0]
    else:
        template = _pick_language(STRINGS[key], language)
    return template.format(**params)


def variants(key: str, language: str) -> list[str]:
    """Return the equivalent phrasings for a key (a single-item list for plain keys)."""
    if key in VARIANTS:
        return list(_pick_language(VARIANTS[key], language))
    return [_pick_language(STRINGS[key], language)]


def render_variant(key: str, language: str, variant: int, **params: Any) -> str:
    """Render one specific phrasing, wrapping out-of-range indexes."""
    options = variants(key, language)
    return options[variant % len(options)].format(**params)
