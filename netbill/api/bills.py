from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
import logging
from netbill.api.pagination import paginate
from netbill.core.billing import generate_monthly_bills
from netbill.db.session import Database, get_db
from netbill.schemas.bill import (
    Bill, BillCreate, BillGenerateRequest, BillPage, BillStatusUpdate, BillUpdate
)
from netbill.schemas.status import BillStatus

router = APIRouter(prefix="/bills", tags=["bills"])
logger = logging.getLogger(__name__)

async def _check_references(db: Database, customer_id: Optional[str], package_id: Optional[str]) -> None:
    if customer_id is not None and not await db.customers.find_by_id(customer_id):
        raise HTTPException(status_code=400, detail="Invalid customer ID")
    if package_id is not None and not await db.packages.find_by_id(package_id):
        raise HTTPException(status_code=400, detail="Invalid package ID")

@router.get("", response_model=BillPage)
async def list_bills(
    status: Optional[BillStatus] = None,
    customer_id: Optional[str] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Database = Depends(get_db)
):
    bills = await db.bills.list_all()
    if status is not None:
        bills = [b for b in bills if b.status == status.value]
    if customer_id is not None:
        bills = [b for b in bills if b.customer_id == customer_id]
    if month is not None:
        bills = [b for b in bills if b.month == str(month)]
    if year is not None:
        bills = [b for b in bills if b.year == str(year)]
    return BillPage(items=paginate(bills, page, limit), total=len(bills), page=page, limit=limit)

@router.get("/customer/{customer_id}", response_model=List[Bill])
async def list_bills_for_customer(customer_id: str, db: Database = Depends(get_db)):
    return await db.bills.list_by_customer(customer_id)

@router.get("/{bill_id}", response_model=Bill)
async def get_bill(bill_id: str, db: Database = Depends(get_db)):
    bill = await db.bills.find_by_id(bill_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return bill

@router.post("", response_model=Bill, status_code=201)
async def create_bill(payload: BillCreate, db: Database = Depends(get_db)):
    await _check_references(db, payload.customer_id, payload.package_id)
    return await db.bills.create(payload.model_dump(exclude_none=True))

@router.post("/generate", response_model=List[Bill], status_code=201)
async def generate_bills(payload: BillGenerateRequest, db: Database = Depends(get_db)):
    return await generate_monthly_bills(db, payload.month, payload.year)

@router.put("/{bill_id}", response_model=Bill)
async def update_bill(bill_id: str, payload: BillUpdate, db: Database = Depends(get_db)):
    changes = payload.model_dump(exclude_none=True)
    await _check_references(db, changes.get("customer_id"), changes.get("package_id"))
    return await db.bills.update(bill_id, changes)

@router.patch("/{bill_id}/status", response_model=Bill)
async def update_bill_status(bill_id: str, payload: BillStatusUpdate, db: Database = Depends(get_db)):
    return await db.bills.update(bill_id, {"status": payload.status})

@router.delete("/{bill_id}")
async def delete_bill(bill_id: str, db: Database = Depends(get_db)):
    """Hard delete. Refused while payments reference the bill."""
    if await db.payments.list_by_bill(bill_id):
        raise HTTPException(status_code=400, detail="Bill has recorded payments")
    await db.bills.delete(bill_id)
    return {"message": "Bill deleted successfully"}
