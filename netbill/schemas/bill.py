from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import List, Optional
from netbill.schemas.package import PackageSummary
from netbill.schemas.record import SheetRecord
from netbill.schemas.status import BillStatus

class Bill(SheetRecord):
    customer_id: str = Field("", validation_alias="Customer_ID")
    package_id: str = Field("", validation_alias="Package_ID")
    month: str = Field("", validation_alias="Month")
    year: str = Field("", validation_alias="Year")
    amount: str = Field("", validation_alias="Amount")
    status: str = Field("", validation_alias="Status")
    due_date: str = Field("", validation_alias="Due_Date")
    created_at: str = Field("", validation_alias="Created_At")

class BillDetail(BaseModel):
    id: str
    customer_id: str
    package_id: str
    package: Optional[PackageSummary] = None
    month: str
    year: str
    amount: str
    status: str
    due_date: str
    created_at: str

class BillCreate(BaseModel):
    customer_id: str = Field(..., min_length=1)
    package_id: str = Field(..., min_length=1)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    amount: Decimal = Field(..., ge=0)
    due_date: Optional[date] = None
    status: Optional[BillStatus] = None

class BillUpdate(BaseModel):
    customer_id: Optional[str] = Field(None, min_length=1)
    package_id: Optional[str] = Field(None, min_length=1)
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=2000, le=2100)
    amount: Optional[Decimal] = Field(None, ge=0)
    due_date: Optional[date] = None
    status: Optional[BillStatus] = None

class BillStatusUpdate(BaseModel):
    status: BillStatus

class BillGenerateRequest(BaseModel):
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)

class BillPage(BaseModel):
    items: List[Bill]
    total: int
    page: int
    limit: int
