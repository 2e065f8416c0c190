from __future__ import annotations

from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from retailpos.config import get_config


class StoreSettings(BaseModel):
    """Store identity printed in receipt headers."""
    model_config = ConfigDict(frozen=True)

    store_name: str = Field(description="Store name")
    store_address: str = Field(default="", description="Branch address")
    store_phone: str = Field(default="", description="Branch phone number")
    store_email: str = Field(default="", description="Store email")
    store_logo: str = Field(default="", description="Logo markup or URL")
    qr_code: str = Field(default="", description="Static QR markup printed when no transfer QR applies")

    @classmethod
    def defaults(cls) -> "StoreSettings":
        config = get_config()
        return cls(
            store_name=config.store_name,
            store_address=config.store_address,
            store_phone=config.store_phone,
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[Mapping]) -> "StoreSettings":
        """Build from the key-value rows of the settings service.

        Rows look like {"setting_key": ..., "setting_value": ...}; unknown keys are
        ignored and blank values fall back to the configured defaults.
        """
        values = cls.defaults().model_dump()
        for row in pairs:
            key = row.get("setting_key")
            value = row.get("setting_value")
            if key in values and value not in (None, ""):
                values[key] = str(value)
        return cls(**values)


class QRPaymentAccount(BaseModel):
    """Bank account used to build transfer QR codes."""
    model_config = ConfigDict(frozen=True)

    provider_id: str = Field(description="Bank BIN, e.g. 970436")
    provider_name: str = Field(default="", description="Bank display name")
    account_number: str = Field(description="Receiving account number")
    account_owner: str = Field(default="", description="Account holder name")
    status: str = Field(default="active", description="Account status")

    @classmethod
    def from_config(cls) -> Optional["QRPaymentAccount"]:
        config = get_config()
        if not (config.qr_bank_bin and config.qr_account_number):
            return None
        return cls(
            provider_id=config.qr_bank_bin,
            account_number=config.qr_account_number,
            account_owner=config.qr_account_name or "",
        )
