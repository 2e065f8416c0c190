from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # Data access
    data_access: Literal["csv", "http"] = "csv"
    data_dir: str = "sample_data"
    api_base_url: str = "http://localhost:3001/api"
    api_timeout: float = 10.0

    # Money and numbering
    thousands_separator: str = "."
    order_id_prefix: str = "HD"
    server_order_prefix: str = "DH"

    # Receipts
    default_paper_size: Literal["A4", "80mm", "57mm"] = "80mm"
    store_name: str = "CỬA HÀNG TIỆN LỢI"
    store_address: str = "123 Đường ABC, Quận XYZ, TP. Hồ Chí Minh"
    store_phone: str = "0123 456 789"
    walk_in_customer_name: str = "Khách Lẻ"

    # Bank transfer QR (used when the settings service has no account)
    qr_bank_bin: Optional[str] = None
    qr_account_number: Optional[str] = None
    qr_account_name: Optional[str] = None

    # Seed data settings
    default_seed_products: int = 60
    default_seed_customers: int = 25
    default_seed_value: int = 42

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
