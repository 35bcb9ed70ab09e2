from functools import lru_cache
from typing import List
import logging

from netbill.core.config import Settings, settings
from netbill.db.sheets import GoogleSheetsRangeStore, InMemoryRangeStore, RangeStore
from netbill.db.tables import BillsTable, CustomersTable, PackagesTable, PaymentsTable, UsersTable

logger = logging.getLogger(__name__)

class Database:
    """The five tables sharing one range store."""

    def __init__(self, store: RangeStore):
        self.store = store
        self.users = UsersTable(store)
        self.customers = CustomersTable(store)
        self.packages = PackagesTable(store)
        self.bills = BillsTable(store)
        self.payments = PaymentsTable(store)

    @property
    def tables(self):
        return [self.users, self.customers, self.packages, self.bills, self.payments]

    async def initialize(self) -> List[str]:
        """Write missing headers; returns the names of the tables that got one."""
        created = []
        for table in self.tables:
            if await table.initialize():
                created.append(table.table_name)
        return created

def build_range_store(config: Settings = settings) -> RangeStore:
    if config.SHEETS_BACKEND == "memory":
        logger.warning("Using in-memory sheets backend; data is lost on restart")
        return InMemoryRangeStore()
    if config.SHEETS_BACKEND == "google":
        logger.info(f"Sheets backend configured for spreadsheet {config.GOOGLE_SHEETS_SPREADSHEET_ID}")
        return GoogleSheetsRangeStore(
            spreadsheet_id=config.GOOGLE_SHEETS_SPREADSHEET_ID,
            service_account_email=config.GOOGLE_SERVICE_ACCOUNT_EMAIL,
            private_key=config.GOOGLE_PRIVATE_KEY,
        )
    raise ValueError(f"Unknown SHEETS_BACKEND '{config.SHEETS_BACKEND}'")

# Global accessor, also the FastAPI dependency
@lru_cache
def get_db() -> Database:
    return Database(build_range_store())
