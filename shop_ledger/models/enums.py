"""
Shared enumerations.

History event types are stored as their display strings, so the
values here are exactly what lands in the `type` / `event_type`
columns and what API clients see.
"""

import enum


class EntityKind(str, enum.Enum):
    """The three kinds of ledger entity."""
    CLIENT = "client"
    SUPPLIER = "supplier"
    INVENTORY = "inventory"


class EntityStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PaymentMethod(str, enum.Enum):
    BANK_TRANSFER = "Bank Transfer"
    CASH = "Cash"
    CHECK = "Check"
    CREDIT_CARD = "Credit Card"
    OTHER = "Other"


class ClientHistoryType(str, enum.Enum):
    CLIENT_CREATED = "Client Created"
    CLIENT_UPDATED = "Client Updated"
    PAYMENT_MADE = "Payment Made"
    BALANCE_ADJUSTED = "Balance Adjusted"
    SALE_CREATED = "Sale Created"
    OTHER = "Other"


class SupplierHistoryType(str, enum.Enum):
    SUPPLIER_CREATED = "Supplier Created"
    SUPPLIER_UPDATED = "Supplier Updated"
    PAYMENT_MADE = "Payment Made"
    CREDIT_BALANCE_ADJUSTED = "Credit Balance Adjusted"
    PURCHASE_ORDER_CREATED = "Purchase Order Created"
    OTHER = "Other"


class InventoryHistoryType(str, enum.Enum):
    ITEM_CREATED = "Item Created"
    PURCHASED = "Purchased"
    SOLD = "Sold"
    USED_IN_REPAIR = "Used in Repair"
    RETURNED = "Returned"
    MANUAL_CORRECTION = "Manual Correction"
    OTHER = "Other"


class PhoneBrand(str, enum.Enum):
    SAMSUNG = "Samsung"
    APPLE = "Apple"
    HUAWEI = "Huawei"
    XIAOMI = "Xiaomi"
    GOOGLE = "Google"
    ONEPLUS = "OnePlus"
    OPPO = "Oppo"
    VIVO = "Vivo"
    REALME = "Realme"
    OTHER = "Other"


class ItemType(str, enum.Enum):
    BATTERY = "Battery"
    SCREEN = "Screen"
    CHARGER = "Charger"
    MOTHERBOARD = "Motherboard"
    CABLE = "Cable"
    CASE = "Case"
    AUDIO_JACK = "Audio Jack"
    CAMERA = "Camera"
    BUTTON = "Button"
    OTHER = "Other"
