from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import List, Optional
from netbill.schemas.record import SheetRecord

class Payment(SheetRecord):
    bill_id: str = Field("", validation_alias="Bill_ID")
    amount: str = Field("", validation_alias="Amount")
    payment_date: str = Field("", validation_alias="Payment_Date")
    payment_method: str = Field("", validation_alias="Payment_Method")
    receipt_file: str = Field("", validation_alias="Receipt_File")
    notes: str = Field("", validation_alias="Notes")
    created_by: str = Field("", validation_alias="Created_By")

class PaymentCreate(BaseModel):
    bill_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    payment_method: str = Field(..., min_length=1, max_length=50)
    payment_date: Optional[date] = None
    receipt_file: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)
    created_by: Optional[str] = None

class PaymentUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, gt=0)
    payment_method: Optional[str] = Field(None, min_length=1, max_length=50)
    payment_date: Optional[date] = None
    receipt_file: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)

class PaymentPage(BaseModel):
    items: List[Payment]
    total: int
    page: int
    limit: int
