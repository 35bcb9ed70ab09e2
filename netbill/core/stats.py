from collections import Counter
from datetime import date, datetime
from typing import List, Optional
from netbill.schemas.bill import Bill
from netbill.schemas.customer import Customer, CustomerStats
from netbill.schemas.dashboard import DashboardStats
from netbill.schemas.package import Package
from netbill.schemas.payment import Payment
from netbill.schemas.status import BillStatus, RecordStatus, Role
from netbill.schemas.user import User, UserStats

def parse_amount(value: str) -> float:
    """Cells are text; blanks and junk count as zero."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0

def parse_date(value: str) -> Optional[date]:
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return None

def compute_dashboard_stats(
    customers: List[Customer],
    bills: List[Bill],
    payments: List[Payment],
    packages: List[Package],
) -> DashboardStats:
    return DashboardStats(
        active_customers=sum(1 for c in customers if c.status == RecordStatus.ACTIVE.value),
        total_bills=len(bills),
        unpaid_bills=sum(1 for b in bills if b.status == BillStatus.UNPAID.value),
        total_revenue=round(sum(parse_amount(p.amount) for p in payments), 2),
        total_packages=len(packages),
    )

def customer_stats(customers: List[Customer], on: Optional[date] = None) -> CustomerStats:
    on = on or date.today()
    joined_this_month = 0
    for c in customers:
        joined = parse_date(c.join_date)
        if joined and joined.year == on.year and joined.month == on.month:
            joined_this_month += 1

    return CustomerStats(
        total=len(customers),
        active=sum(1 for c in customers if c.status == RecordStatus.ACTIVE.value),
        inactive=sum(1 for c in customers if c.status == RecordStatus.INACTIVE.value),
        this_month=joined_this_month,
    )

def user_stats(users: List[User]) -> UserStats:
    roles = Counter(u.role for u in users)
    return UserStats(
        total=len(users),
        active=sum(1 for u in users if u.status == RecordStatus.ACTIVE.value),
        inactive=sum(1 for u in users if u.status == RecordStatus.INACTIVE.value),
        by_role={role.value: roles.get(role.value, 0) for role in Role},
    )
