"""Rule-based purchase categorization from merchant metadata and descriptions"""

import re
from dataclasses import fields
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from lifedash_gateway.domain.models import CategorizedPurchase, Merchant, Purchase, TransactionCategory

KeywordTable = Mapping[TransactionCategory, Tuple[str, ...]]

# Substrings of the merchant's free-text category. Checked in this order; first hit wins.
CATEGORY_KEYWORDS: KeywordTable = MappingProxyType({
    TransactionCategory.FOOD: (
        "food", "restaurant", "dining", "cafe", "coffee", "bakery", "grocery",
        "supermarket", "meal", "fast food", "pizzeria", "deli",
    ),
    TransactionCategory.SHOPPING: (
        "shopping", "retail", "clothing", "apparel", "department store",
        "electronics", "boutique", "outlet", "mall", "shoe",
    ),
    TransactionCategory.ENTERTAINMENT: (
        "entertainment", "movie", "cinema", "theater", "theatre", "game",
        "music", "concert", "streaming", "amusement",
    ),
    TransactionCategory.TRAVEL: (
        "travel", "hotel", "lodging", "airline", "airport", "flight",
        "resort", "cruise", "vacation",
    ),
    TransactionCategory.TRANSPORTATION: (
        "transportation", "gas", "fuel", "automotive", "parking", "taxi",
        "rideshare", "transit", "toll",
    ),
    TransactionCategory.UTILITIES: (
        "utilit", "telecom", "electric", "water", "internet", "wireless",
        "cable", "phone",
    ),
    TransactionCategory.HEALTH: (
        "health", "medical", "pharmacy", "hospital", "clinic", "dental",
        "doctor", "fitness", "gym",
    ),
    TransactionCategory.EDUCATION: (
        "education", "school", "university", "college", "tuition", "books",
        "academy",
    ),
    TransactionCategory.PERSONAL: (
        "personal", "beauty", "salon", "barber", "cosmetic",
    ),
    TransactionCategory.HOME: (
        "home", "furniture", "hardware", "garden", "appliance", "decor",
    ),
})

# Well-known brand names, matched as whole words of the merchant name.
MERCHANT_NAME_KEYWORDS: KeywordTable = MappingProxyType({
    TransactionCategory.FOOD: (
        "starbucks", "mcdonald", "dunkin", "chipotle", "subway", "burger king",
        "wendy", "taco bell", "domino", "pizza hut", "kfc", "chick-fil-a",
        "panera", "whole foods", "trader joe", "kroger", "safeway",
        "doordash", "grubhub", "uber eats",
    ),
    TransactionCategory.SHOPPING: (
        "amazon", "walmart", "target", "costco", "best buy", "ebay", "macy's",
        "macys", "nordstrom", "etsy",
    ),
    TransactionCategory.ENTERTAINMENT: (
        "netflix", "spotify", "hulu", "disney", "hbo", "amc", "steam",
        "playstation", "xbox", "ticketmaster",
    ),
    TransactionCategory.TRAVEL: (
        "delta air lines", "delta airlines", "united airlines", "american airlines",
        "southwest", "marriott", "hilton", "hyatt", "airbnb", "expedia",
    ),
    TransactionCategory.TRANSPORTATION: (
        "uber", "lyft", "shell", "exxon", "exxonmobil", "chevron", "mobil", "amtrak",
    ),
    TransactionCategory.UTILITIES: (
        "verizon", "at&t", "comcast", "xfinity", "t-mobile", "spectrum",
        "pg&e", "duke energy",
    ),
    TransactionCategory.HEALTH: (
        "cvs", "walgreens", "rite aid", "planet fitness", "la fitness",
        "equinox", "kaiser", "delta dental",
    ),
    TransactionCategory.EDUCATION: (
        "coursera", "udemy", "chegg", "barnes & noble",
    ),
    TransactionCategory.PERSONAL: (
        "sephora", "ulta", "great clips", "supercuts",
    ),
    TransactionCategory.HOME: (
        "home depot", "lowe's", "lowes", "ikea", "wayfair", "bed bath",
    ),
})

# Last resort: words in the purchase description.
DESCRIPTION_KEYWORDS: KeywordTable = MappingProxyType({
    TransactionCategory.FOOD: (
        "lunch", "dinner", "breakfast", "grocer", "restaurant", "coffee", "food",
    ),
    TransactionCategory.SHOPPING: ("clothes", "shopping", "online order"),
    TransactionCategory.ENTERTAINMENT: ("movie", "concert", "ticket", "game"),
    TransactionCategory.TRAVEL: ("flight", "hotel", "airfare", "trip"),
    TransactionCategory.TRANSPORTATION: ("fuel", "parking", "taxi", "toll", "bus fare"),
    TransactionCategory.UTILITIES: ("electric", "water bill", "internet", "phone bill", "utility"),
    TransactionCategory.HEALTH: ("pharmacy", "doctor", "prescription", "medical", "gym", "fitness"),
    TransactionCategory.EDUCATION: ("tuition", "textbook", "course"),
    TransactionCategory.PERSONAL: ("haircut", "salon", "cosmetics"),
    TransactionCategory.HOME: ("furniture", "mortgage", "home repair"),
    TransactionCategory.INCOME: ("salary", "payroll", "paycheck", "direct deposit", "refund"),
})


def _contains_word(keyword: str, text: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}\b", text) is not None


def match_keywords(text: Any, table: KeywordTable, whole_words: bool = False) -> Optional[TransactionCategory]:
    """
    Return the first category whose keywords occur in text, or None for no match / non-string text.

    With whole_words, a keyword only matches on word boundaries ("cvs" in
    "CVS #12", but "macy's" never inside "pharmacy").
    """
    if not isinstance(text, str) or not text.strip():
        return None

    lowered = text.lower()
    for category, keywords in table.items():
        if whole_words:
            if any(_contains_word(keyword, lowered) for keyword in keywords):
                return category
        elif any(keyword in lowered for keyword in keywords):
            return category
    return None


def categorize_purchase(purchase: Purchase, merchant: Optional[Merchant] = None) -> CategorizedPurchase:
    """
    Assign a spending category to a purchase.

    Match order (first hit wins):
    1. Merchant category text against CATEGORY_KEYWORDS
    2. Merchant name against MERCHANT_NAME_KEYWORDS (whole words)
    3. Purchase description against DESCRIPTION_KEYWORDS
    4. TransactionCategory.OTHER

    Missing merchants, missing fields and non-string values simply do not
    match, so malformed merchant data always degrades to OTHER instead of raising.
    """
    category = None
    if merchant is not None:
        category = match_keywords(merchant.category, CATEGORY_KEYWORDS)
        if category is None:
            category = match_keywords(merchant.name, MERCHANT_NAME_KEYWORDS, whole_words=True)
    if category is None:
        category = match_keywords(purchase.description, DESCRIPTION_KEYWORDS)

    return CategorizedPurchase(
        **{f.name: getattr(purchase, f.name) for f in fields(Purchase)},
        category=category or TransactionCategory.OTHER,
        merchant_name=merchant.name if merchant is not None else None,
    )


def categorize_purchases(
    purchases: Iterable[Purchase],
    merchants: Iterable[Merchant] = (),
) -> List[CategorizedPurchase]:
    """Categorize a batch of purchases, looking each merchant up by id"""
    merchants_by_id = {m.id: m for m in merchants}
    return [categorize_purchase(p, merchants_by_id.get(p.merchant_id)) for p in purchases]
