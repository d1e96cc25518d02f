"""
Pydantic schemas for inventory items.

Brand and type are checked against the catalogue on the way in;
stored records keep whatever string the row holds.
"""

from datetime import datetime

from pydantic import Field

from shop_ledger.models.enums import PhoneBrand, ItemType
from shop_ledger.schemas.base import UIModel
from shop_ledger.schemas.ledger import HistoryEvent


class InventoryItemCreate(UIModel):
    item_name: str = Field(min_length=2, max_length=200)
    phone_brand: PhoneBrand
    item_type: ItemType
    buying_price: float = Field(gt=0)
    selling_price: float = Field(gt=0)
    quantity_in_stock: int = Field(default=0, ge=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)
    supplier_info: str | None = None
    barcode: str | None = Field(default=None, max_length=64)


class InventoryItemUpdate(UIModel):
    item_name: str | None = Field(default=None, min_length=2, max_length=200)
    phone_brand: PhoneBrand | None = None
    item_type: ItemType | None = None
    buying_price: float | None = Field(default=None, gt=0)
    selling_price: float | None = Field(default=None, gt=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)
    supplier_info: str | None = None
    barcode: str | None = Field(default=None, max_length=64)


class InventoryItem(UIModel):
    id: str
    item_name: str
    phone_brand: str
    item_type: str
    buying_price: float
    selling_price: float
    quantity_in_stock: int = 0
    low_stock_threshold: int | None = None
    supplier_info: str | None = None
    barcode: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    history: list[HistoryEvent] = []

    @property
    def balance(self) -> int:
        return self.quantity_in_stock

    @property
    def name(self) -> str:
        return self.item_name

    @property
    def is_low_stock(self) -> bool:
        if self.low_stock_threshold is None:
            return False
        return self.quantity_in_stock <= self.low_stock_threshold
