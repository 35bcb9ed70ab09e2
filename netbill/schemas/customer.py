from pydantic import BaseModel, Field
from typing import Optional
from netbill.schemas.record import SheetRecord
from netbill.schemas.package import PackageSummary
from netbill.schemas.status import RecordStatus

PHONE_PATTERN = r"^\+?[1-9]\d{0,15}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

class Customer(SheetRecord):
    name: str = Field("", validation_alias="Name")
    address: str = Field("", validation_alias="Address")
    phone: str = Field("", validation_alias="Phone")
    email: str = Field("", validation_alias="Email")
    package_id: str = Field("", validation_alias="Package_ID")
    status: str = Field("", validation_alias="Status")
    join_date: str = Field("", validation_alias="Join_Date")

class CustomerDetail(BaseModel):
    id: str
    name: str
    address: str
    phone: str
    email: str
    package_id: str
    package: Optional[PackageSummary] = None
    status: str
    join_date: str

class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    address: str = Field(..., min_length=10, max_length=500)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    package_id: str = Field(..., min_length=1)
    status: Optional[RecordStatus] = None

class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    address: Optional[str] = Field(None, min_length=10, max_length=500)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    package_id: Optional[str] = Field(None, min_length=1)
    status: Optional[RecordStatus] = None

class CustomerStats(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    this_month: int = 0
