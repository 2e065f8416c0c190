"""Vietnamese wording of VND amounts for receipt footers."""

from __future__ import annotations

ONES = ["", "một", "hai", "ba", "bốn", "năm", "sáu", "bảy", "tám", "chín"]
TENS = ["", "mười", "hai mươi", "ba mươi", "bốn mươi", "năm mươi",
        "sáu mươi", "bảy mươi", "tám mươi", "chín mươi"]

ZERO = "Không đồng"
CURRENCY = "đồng"


def amount_in_words(amount: int) -> str:
    """Write an amount out the way receipt footers print it.

    Three tiers only: below one thousand is fully worded, thousands and millions
    keep their leading groups as numerals and drop the digits under the second
    group, e.g. 2_500_000 -> "2 triệu 500 nghìn đồng".
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Amount must be a whole number of VND, got {amount!r}")
    if amount < 0:
        raise ValueError(f"Amount must not be negative, got {amount}")
    if amount == 0:
        return ZERO

    if amount < 1_000:
        hundreds, tens, ones = amount // 100, (amount % 100) // 10, amount % 10
        parts = [
            f"{ONES[hundreds]} trăm" if hundreds else "",
            TENS[tens],
            ONES[ones],
        ]
    elif amount < 1_000_000:
        hundreds = (amount % 1_000) // 100
        parts = [f"{amount // 1_000} nghìn", f"{hundreds} trăm" if hundreds else ""]
    else:
        thousands = (amount % 1_000_000) // 1_000
        parts = [f"{amount // 1_000_000} triệu", f"{thousands} nghìn" if thousands else ""]

    return " ".join(p for p in parts + [CURRENCY] if p).strip()
