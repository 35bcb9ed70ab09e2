from pydantic import BaseModel, Field
from decimal import Decimal
from typing import Optional
from netbill.schemas.record import SheetRecord
from netbill.schemas.status import RecordStatus

class Package(SheetRecord):
    name: str = Field("", validation_alias="Name")
    speed: str = Field("", validation_alias="Speed")
    price: str = Field("", validation_alias="Price")
    status: str = Field("", validation_alias="Status")
    description: str = Field("", validation_alias="Description")

class PackageSummary(BaseModel):
    id: str
    name: str
    speed: str
    price: str

class PackageCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    speed: Decimal = Field(..., ge=0)
    price: Decimal = Field(..., ge=0)
    description: Optional[str] = Field(None, max_length=500)
    status: Optional[RecordStatus] = None

class PackageUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    speed: Optional[Decimal] = Field(None, ge=0)
    price: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=500)
    status: Optional[RecordStatus] = None
