from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from retail.business.core.money import MAX_AMOUNT
from retail.schemas.catalog import reject_null


class CustomerIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Customer name")
    email: Optional[str] = Field(None, description="Email address")
    phone: Optional[str] = Field(None, max_length=30, description="Phone number")
    address: Optional[str] = Field(None, description="Address")
    gstin: Optional[str] = Field(None, max_length=20, description="GST identification number")
    credit_limit: Optional[Decimal] = Field(None, ge=0, le=MAX_AMOUNT, description="Credit limit")


class CustomerUpdate(CustomerIn):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    is_active: Optional[bool] = None

    @field_validator('name', 'is_active')
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class VendorIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Vendor name")
    contact_person: Optional[str] = Field(None, max_length=200, description="Contact person")
    email: Optional[str] = Field(None, description="Email address")
    phone: Optional[str] = Field(None, max_length=30, description="Phone number")
    address: Optional[str] = Field(None, description="Address")
    gstin: Optional[str] = Field(None, max_length=20, description="GST identification number")


class VendorUpdate(VendorIn):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    is_active: Optional[bool] = None

    @field_validator('name', 'is_active')
    @classmethod
    def not_null(cls, value):
        return reject_null(value)
