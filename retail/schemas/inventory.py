from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from retail.business.core.money import MAX_AMOUNT, MAX_QUANTITY


class BatchIn(BaseModel):
    product_id: int = Field(..., description="Product id")
    vendor_id: Optional[int] = Field(None, description="Vendor the batch was bought from")
    quantity: Decimal = Field(..., le=MAX_QUANTITY, description="Quantity received")
    purchase_price: Decimal = Field(..., ge=0, le=MAX_AMOUNT, description="Unit purchase price")
    purchased_at: Optional[datetime] = Field(None, description="Defaults to now")
    expiry_date: Optional[date] = None
    location: Optional[str] = Field(None, max_length=200)
    batch_number: Optional[str] = Field(None, max_length=100)


class PurchaseItemIn(BaseModel):
    # Business rules (required product, positive quantity) are checked by PurchaseFactory
    product_id: Optional[int] = None
    quantity: Decimal = Field(Decimal("0"), le=MAX_QUANTITY)
    unit_price: Decimal = Field(Decimal("0"), ge=0, le=MAX_AMOUNT)


class PurchaseIn(BaseModel):
    vendor_id: Optional[int] = Field(None, description="Vendor id (required)")
    purchase_date: Optional[datetime] = Field(None, description="Defaults to now")
    location: Optional[str] = Field(None, max_length=200, description="Defaults to Warehouse")
    items: List[PurchaseItemIn] = Field(default_factory=list)
