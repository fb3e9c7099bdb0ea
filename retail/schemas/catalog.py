"""
Request schemas for the product catalogue.

Each model validates one JSON request body; services receive
``model_dump(exclude_unset=True)`` so partial updates only touch the fields
that were sent. Update models reject an explicit ``null`` for columns that
cannot be empty.
"""

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from retail.business.core.money import MAX_AMOUNT, MAX_QUANTITY

ProductUnit = Literal['kg', 'gm', 'ltr', 'ml', 'pcs', 'box', 'pack']


def reject_null(value):
    """Field validator body for optional update fields backed by NOT NULL columns."""
    if value is None:
        raise ValueError("cannot be null")
    return value


class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Category name")
    description: Optional[str] = Field(None, description="Category description")
    parent_id: Optional[int] = Field(None, description="Parent category id")


class ProductBase(BaseModel):
    description: Optional[str] = Field(None, description="Product description")
    sku: Optional[str] = Field(None, max_length=100, description="Stock keeping unit")
    barcode: Optional[str] = Field(None, max_length=100, description="Item code / barcode")
    hsn_code: Optional[str] = Field(None, max_length=20, description="HSN classification code")
    category_id: Optional[int] = Field(None, description="Category id")
    mrp: Optional[Decimal] = Field(None, ge=0, le=MAX_AMOUNT, description="Maximum retail price")
    min_stock_level: Optional[Decimal] = Field(None, ge=0, le=MAX_QUANTITY, description="Low-stock threshold")
    max_stock_level: Optional[Decimal] = Field(None, ge=0, le=MAX_QUANTITY, description="Reorder ceiling")

    @model_validator(mode='after')
    def check_stock_levels(self):
        if (self.min_stock_level is not None and self.max_stock_level is not None
                and self.max_stock_level < self.min_stock_level):
            raise ValueError("max_stock_level cannot be below min_stock_level")
        return self


class ProductIn(ProductBase):
    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    unit: ProductUnit = Field('pcs', description="Unit of measure")
    purchase_price: Decimal = Field(Decimal('0'), ge=0, le=MAX_AMOUNT, description="Unit purchase price")
    selling_price: Decimal = Field(Decimal('0'), ge=0, le=MAX_AMOUNT, description="Unit selling price")
    tax_rate: Decimal = Field(Decimal('0'), ge=0, le=100, description="Tax rate in percent")


class ProductUpdate(ProductBase):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    unit: Optional[ProductUnit] = None
    purchase_price: Optional[Decimal] = Field(None, ge=0, le=MAX_AMOUNT)
    selling_price: Optional[Decimal] = Field(None, ge=0, le=MAX_AMOUNT)
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=100)
    is_active: Optional[bool] = None

    @field_validator('name', 'unit', 'purchase_price', 'selling_price', 'tax_rate', 'is_active')
    @classmethod
    def not_null(cls, value):
        # Only runs for fields present in the body
        return reject_null(value)
