from pydantic import BaseModel

class DashboardStats(BaseModel):
    active_customers: int = 0
    total_bills: int = 0
    unpaid_bills: int = 0
    total_revenue: float = 0.0
    total_packages: int = 0
