import calendar
import logging
from datetime import date
from typing import List, Optional
from netbill.core.config import settings
from netbill.db.session import Database
from netbill.schemas.bill import Bill
from netbill.schemas.status import RecordStatus

logger = logging.getLogger(__name__)

def due_date_for(month: int, year: int, due_day: int) -> date:
    """Due day clamped to the length of the month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(due_day, last_day)))

async def generate_monthly_bills(db: Database, month: int, year: int,
                                 due_day: Optional[int] = None) -> List[Bill]:
    """
    Create one bill for the period for every active customer, priced at the
    customer's package. Customers that already have a bill for the period, or
    whose package no longer exists, are skipped.
    """
    due = due_date_for(month, year, due_day or settings.BILL_DUE_DAY)

    customers = await db.customers.list_all()
    packages = {p.id: p for p in await db.packages.list_all()}

    created: List[Bill] = []
    for customer in customers:
        if customer.status != RecordStatus.ACTIVE.value:
            continue
        if await db.bills.find_for_period(customer.id, month, year):
            continue
        package = packages.get(customer.package_id)
        if package is None:
            logger.warning(f"Customer {customer.id} references missing package '{customer.package_id}', not billed")
            continue

        bill = await db.bills.create({
            "customer_id": customer.id,
            "package_id": package.id,
            "month": month,
            "year": year,
            "amount": package.price,
            "due_date": due,
        })
        created.append(bill)

    logger.info(f"Generated {len(created)} bills for {year}-{month:02d}")
    return created
