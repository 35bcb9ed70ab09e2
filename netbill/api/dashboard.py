from fastapi import APIRouter, Depends
from netbill.core.stats import compute_dashboard_stats
from netbill.db.session import Database, get_db
from netbill.schemas.dashboard import DashboardStats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("/overview", response_model=DashboardStats)
async def dashboard_overview(db: Database = Depends(get_db)):
    # four sequential full-table reads
    return compute_dashboard_stats(
        customers=await db.customers.list_all(),
        bills=await db.bills.list_all(),
        payments=await db.payments.list_all(),
        packages=await db.packages.list_all(),
    )
