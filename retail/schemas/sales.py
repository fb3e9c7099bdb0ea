from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from retail.business.core.money import MAX_AMOUNT, MAX_QUANTITY

InvoiceStatus = Literal['draft', 'pending', 'paid', 'cancelled']
PaymentStatus = Literal['pending', 'partial', 'paid', 'overdue']
PaymentMethod = Literal['cash', 'card', 'upi', 'bank_transfer', 'cheque']


class InvoiceItemIn(BaseModel):
    # Only types and column limits are checked here; InvoiceCalculator reports
    # rule violations per line
    product_id: Optional[int] = None
    quantity: Decimal = Field(Decimal('0'), le=MAX_QUANTITY)
    unit_price: Decimal = Field(Decimal('0'), le=MAX_AMOUNT)
    tax_rate: Optional[Decimal] = Field(None, le=100)


class InvoiceCalculationIn(BaseModel):
    items: List[InvoiceItemIn] = Field(default_factory=list)
    discount_amount: Optional[Decimal] = Field(None, le=MAX_AMOUNT)
    strict_pricing: bool = Field(False, description="Also require unit_price > 0 on every line")


class InvoiceCreate(InvoiceCalculationIn):
    customer_id: Optional[int] = Field(None, description="Omit for a walk-in customer")
    notes: Optional[str] = None
    due_date: Optional[date] = None
    delivery_date: Optional[date] = None


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus
    payment_status: Optional[PaymentStatus] = None


class PaymentIn(BaseModel):
    amount: Decimal = Field(..., le=MAX_AMOUNT)
    payment_method: PaymentMethod = 'cash'
    reference_number: Optional[str] = Field(None, max_length=100)
    payment_date: Optional[datetime] = None
    notes: Optional[str] = None
