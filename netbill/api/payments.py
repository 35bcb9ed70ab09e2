from fastapi import APIRouter, Depends, HTTPException, Query
from datetime import date
from typing import List, Optional
import logging
from netbill.api.pagination import paginate
from netbill.db.session import Database, get_db
from netbill.schemas.payment import Payment, PaymentCreate, PaymentPage, PaymentUpdate

router = APIRouter(prefix="/payments", tags=["payments"])
logger = logging.getLogger(__name__)

@router.get("", response_model=PaymentPage)
async def list_payments(
    bill_id: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Database = Depends(get_db)
):
    payments = await db.payments.list_all()
    if bill_id is not None:
        payments = [p for p in payments if p.bill_id == bill_id]
    return PaymentPage(items=paginate(payments, page, limit), total=len(payments), page=page, limit=limit)

@router.get("/bill/{bill_id}", response_model=List[Payment])
async def list_payments_for_bill(bill_id: str, db: Database = Depends(get_db)):
    return await db.payments.list_by_bill(bill_id)

@router.get("/{payment_id}", response_model=Payment)
async def get_payment(payment_id: str, db: Database = Depends(get_db)):
    payment = await db.payments.find_by_id(payment_id)
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")
    return payment

@router.post("", response_model=Payment, status_code=201)
async def create_payment(payload: PaymentCreate, db: Database = Depends(get_db)):
    if not await db.bills.find_by_id(payload.bill_id):
        raise HTTPException(status_code=400, detail="Invalid bill ID")
    fields = payload.model_dump(exclude_none=True)
    fields.setdefault("payment_date", date.today())
    return await db.payments.create(fields)

@router.put("/{payment_id}", response_model=Payment)
async def update_payment(payment_id: str, payload: PaymentUpdate, db: Database = Depends(get_db)):
    return await db.payments.update(payment_id, payload.model_dump(exclude_none=True))

@router.delete("/{payment_id}")
async def delete_payment(payment_id: str, db: Database = Depends(get_db)):
    await db.payments.delete(payment_id)
    return {"message": "Payment deleted successfully"}
