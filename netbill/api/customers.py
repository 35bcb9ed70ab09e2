from fastapi import APIRouter, Depends, HTTPException
from typing import Dict, List, Optional
import logging
from netbill.core.stats import customer_stats
from netbill.db.session import Database, get_db
from netbill.schemas.bill import BillDetail
from netbill.schemas.customer import Customer, CustomerCreate, CustomerDetail, CustomerStats, CustomerUpdate
from netbill.schemas.package import Package, PackageSummary
from netbill.schemas.status import RecordStatus

router = APIRouter(prefix="/customers", tags=["customers"])
logger = logging.getLogger(__name__)

def summarize(package: Optional[Package]) -> Optional[PackageSummary]:
    if not package:
        return None
    return PackageSummary(id=package.id, name=package.name, speed=package.speed, price=package.price)

def enrich(customer: Customer, packages: Dict[str, Package]) -> CustomerDetail:
    return CustomerDetail(**customer.model_dump(), package=summarize(packages.get(customer.package_id)))

async def _require_package(db: Database, package_id: str) -> None:
    if not await db.packages.find_by_id(package_id):
        raise HTTPException(status_code=400, detail="Invalid package ID")

@router.get("", response_model=List[CustomerDetail])
async def list_customers(db: Database = Depends(get_db)):
    customers = await db.customers.list_all()
    packages = {p.id: p for p in await db.packages.list_all()}
    return [enrich(c, packages) for c in customers]

@router.get("/stats", response_model=CustomerStats)
async def get_customer_stats(db: Database = Depends(get_db)):
    return customer_stats(await db.customers.list_all())

@router.get("/{customer_id}", response_model=CustomerDetail)
async def get_customer(customer_id: str, db: Database = Depends(get_db)):
    customer = await db.customers.find_by_id(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    packages = {p.id: p for p in await db.packages.list_all()}
    return enrich(customer, packages)

@router.post("", response_model=Customer, status_code=201)
async def create_customer(payload: CustomerCreate, db: Database = Depends(get_db)):
    await _require_package(db, payload.package_id)
    if await db.customers.find_by_email(payload.email):
        raise HTTPException(status_code=400, detail="Customer with this email already exists")
    return await db.customers.create(payload.model_dump(exclude_none=True))

@router.put("/{customer_id}", response_model=Customer)
async def update_customer(customer_id: str, payload: CustomerUpdate, db: Database = Depends(get_db)):
    changes = payload.model_dump(exclude_none=True)
    if "package_id" in changes:
        await _require_package(db, changes["package_id"])
    return await db.customers.update(customer_id, changes)

@router.delete("/{customer_id}")
async def deactivate_customer(customer_id: str, db: Database = Depends(get_db)):
    # soft delete: the row stays, status flips
    await db.customers.update(customer_id, {"status": RecordStatus.INACTIVE})
    return {"message": "Customer deactivated successfully"}

@router.post("/{customer_id}/activate")
async def activate_customer(customer_id: str, db: Database = Depends(get_db)):
    await db.customers.update(customer_id, {"status": RecordStatus.ACTIVE})
    return {"message": "Customer activated successfully"}

@router.get("/{customer_id}/bills", response_model=List[BillDetail])
async def list_customer_bills(customer_id: str, db: Database = Depends(get_db)):
    if not await db.customers.find_by_id(customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    packages = {p.id: p for p in await db.packages.list_all()}
    return [
        BillDetail(**bill.model_dump(), package=summarize(packages.get(bill.package_id)))
        for bill in await db.bills.list_by_customer(customer_id)
    ]
