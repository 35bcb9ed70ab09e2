from enum import Enum

class RecordStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

class BillStatus(str, Enum):
    UNPAID = "unpaid"
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"

class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    OPERATOR = "operator"
    CUSTOMER = "customer"
