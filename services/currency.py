# services/currency.py
# Base-currency amounts → display strings. Always convert() the base integer
# first, then format_amount(); never re-format an already formatted value.

from __future__ import annotations

from core import config
from services.rates import RateCache

# code: (symbol, decimals, indian grouping)
_STYLES: dict[str, tuple[str, int, bool]] = {
    "INR": ("₹", 0, True),
    "USD": ("$", 2, False),
    "EUR": ("€", 2, False),
    "GBP": ("£", 2, False),
    "JPY": ("¥", 0, False),
    "AED": ("AED ", 2, False),
}


def convert(amount: float, code: str, rates: RateCache) -> float:
    code = code.upper()
    if code == config.BASE_CURRENCY:
        return amount
    return amount * rates.lookup(code)


def _indian_grouping(digits: str) -> str:
    # 12345678 -> 1,23,45,678
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_amount(amount: float, code: str) -> str:
    code = code.upper()
    if code not in _STYLES:
        raise ValueError(f"Unsupported currency: {code}")
    symbol, decimals, indian = _STYLES[code]

    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):,.{decimals}f}"
    if indian:
        whole, _, frac = text.replace(",", "").partition(".")
        text = _indian_grouping(whole) + (f".{frac}" if frac else "")
    if text.strip("0.,") == "":
        sign = ""
    return f"{sign}{symbol}{text}"


def display(amount_in_base: float, code: str, rates: RateCache) -> str:
    return format_amount(convert(amount_in_base, code, rates), code)
