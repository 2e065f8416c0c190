from .interface import CatalogAccess, SettingsAccess, OrderStorage, DataAccess
from .util import get_data_access

__all__ = [
    "CatalogAccess",
    "SettingsAccess",
    "OrderStorage",
    "DataAccess",
    "get_data_access",
]
