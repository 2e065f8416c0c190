"""Bank-transfer QR image URLs (Sepay VietQR service)."""

from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import quote, urlencode

SEPAY_QR_URL = "https://qr.sepay.vn/img"
DEFAULT_BANK_CODE = "VCB"
DEFAULT_DESCRIPTION = "chuyen khoan"

# BIN -> (Sepay bank code, display name)
BANKS: Dict[str, tuple] = {
    "970436": ("VCB", "Vietcombank"),
    "970415": ("VTB", "VietinBank"),
    "970418": ("BIDV", "BIDV"),
    "970416": ("ACB", "ACB"),
    "970407": ("TCB", "Techcombank"),
    "970422": ("MB", "MB Bank"),
    "970432": ("VPB", "VPBank"),
    "970423": ("TPB", "TPBank"),
    "970403": ("STB", "Sacombank"),
    "970437": ("HDB", "HDBank"),
    "970448": ("OCB", "OCB"),
    "970426": ("MSB", "MSB"),
    "970405": ("AGRI", "Agribank"),
    "970431": ("EIB", "Eximbank"),
    "970444": ("OJB", "OceanBank"),
    "970438": ("BVB", "BaoViet Bank"),
    "970429": ("SCB", "SCB"),
    "970443": ("SHB", "SHB"),
    "970441": ("VIB", "VIB"),
    "970449": ("LPB", "LienVietPostBank"),
    "970452": ("KLB", "KienLongBank"),
    "970440": ("SEAB", "SeABank"),
    "970454": ("VCCB", "VietCapitalBank"),
    "970425": ("ABB", "ABBank"),
    "970427": ("VAB", "VietABank"),
    "970428": ("NAB", "NamABank"),
    "970430": ("PGB", "PGBank"),
    "970408": ("GPB", "GPBank"),
    "970409": ("BAB", "BacABank"),
    "970406": ("DOB", "DongABank"),
    "970434": ("IVB", "IndovinaBank"),
    "970412": ("PVCB", "PVcomBank"),
    "970421": ("VRB", "VietRussiaBank"),
    "970419": ("NCB", "NCB"),
    "970424": ("SHBVN", "Shinhan Bank Vietnam"),
    "970442": ("HLBVN", "Hong Leong Bank Vietnam"),
    "970410": ("SCVN", "Standard Chartered Vietnam"),
    "970439": ("PBVN", "Public Bank Vietnam"),
    "970458": ("UOB", "UOB Vietnam"),
    "970459": ("CIMB", "CIMB Vietnam"),
    "970457": ("WVN", "Woori Bank Vietnam"),
    "970446": ("COOPBANK", "Co-opBank"),
    "970445": ("CBB", "CBBank"),
    "970400": ("SGICB", "SaigonBank"),
}


def bank_code(bank_bin: str) -> str:
    return BANKS.get(bank_bin, (DEFAULT_BANK_CODE,))[0]


def bank_name(bank_bin: str) -> str:
    entry = BANKS.get(bank_bin)
    return entry[1] if entry else "Unknown Bank"


def build_vietqr_url(
    bank_bin: str,
    account_number: str,
    account_name: str = "",
    amount: Optional[int] = None,
    description: Optional[str] = None,
) -> str:
    """Image URL of a transfer QR for `amount` VND into the given account.

    The account name is not part of the Sepay URL; it is accepted so callers can
    pass a QR account as-is.
    """
    params = {
        "acc": account_number,
        "bank": bank_code(bank_bin),
        "amount": amount if amount and amount > 0 else 0,
        "des": description or DEFAULT_DESCRIPTION,
    }
    return f"{SEPAY_QR_URL}?{urlencode(params, quote_via=quote)}"
