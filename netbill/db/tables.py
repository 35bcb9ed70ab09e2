"""
Typed tables on top of a RangeStore.

Every table is a header row plus data rows. Reads fetch the whole range.
Creation appends one row. Every other mutation reads the whole table, merges
in memory and overwrites the whole range, so two concurrent writers to the
same table race and the last overwrite wins in full. There is no locking or
version check.
"""
from datetime import date, datetime
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar
import logging
import time
import uuid

from netbill.core.errors import RecordNotFound
from netbill.db.sheets import RangeStore
from netbill.schemas.bill import Bill
from netbill.schemas.customer import Customer
from netbill.schemas.package import Package
from netbill.schemas.payment import Payment
from netbill.schemas.record import SheetRecord, render_cell
from netbill.schemas.status import BillStatus, RecordStatus, Role
from netbill.schemas.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SheetRecord)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Millisecond timestamp plus 122 random bits, both in base 36."""
    return to_base36(int(time.time() * 1000)) + to_base36(uuid.uuid4().int)


def now_timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def today() -> str:
    return date.today().strftime("%Y-%m-%d")


class EntityTable(Generic[T]):
    table_name: str
    record: Type[T]

    def __init__(self, store: RangeStore):
        self.store = store

    def defaults(self) -> Dict[str, Any]:
        """Field values applied on create when the caller supplies none."""
        return {}

    def _patch(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        return {self.record.field_name(key): value for key, value in fields.items()}

    async def _rewrite(self, entities: List[T]) -> None:
        rows = [self.record.columns()] + [entity.to_row() for entity in entities]
        await self.store.overwrite_range(self.table_name, rows)

    async def _locate(self, record_id: str):
        entities = await self.list_all()
        for index, entity in enumerate(entities):
            if entity.id == record_id:
                return entities, index
        raise RecordNotFound(self.table_name, record_id)

    async def list_all(self) -> List[T]:
        rows = await self.store.fetch_range(self.table_name)
        if not rows:
            return []
        header = rows[0]
        return [self.record.from_row(header, row) for row in rows[1:]]

    async def find_by_id(self, record_id: str) -> Optional[T]:
        for entity in await self.list_all():
            if entity.id == record_id:
                return entity
        return None

    async def find_by(self, field: str, value: Any) -> List[T]:
        name = self.record.field_name(field)
        target = render_cell(value)
        return [entity for entity in await self.list_all() if getattr(entity, name) == target]

    async def create(self, fields: Mapping[str, Any]) -> T:
        values = self.defaults()
        for name, value in self._patch(fields).items():
            # blanks fall back to the table default; the ID is always ours
            if name == "id" or value is None or value == "":
                continue
            values[name] = value
        values["id"] = generate_id()

        entity = self.record.model_validate(values)
        await self.store.append_rows(self.table_name, [entity.to_row()])
        logger.info(f"{self.table_name}: created {entity.id}")
        return entity

    async def update(self, record_id: str, changes: Mapping[str, Any]) -> T:
        patch = self._patch(changes)
        if patch.get("id", record_id) != record_id:
            raise ValueError(f"{self.table_name}: ID cannot be changed")

        entities, index = await self._locate(record_id)
        merged = self.record.model_validate({**entities[index].model_dump(), **patch})
        entities[index] = merged
        await self._rewrite(entities)
        logger.info(f"{self.table_name}: updated {record_id} ({', '.join(sorted(patch))})")
        return merged

    async def delete(self, record_id: str) -> T:
        entities, index = await self._locate(record_id)
        removed = entities.pop(index)
        await self._rewrite(entities)
        logger.info(f"{self.table_name}: deleted {record_id}")
        return removed

    async def initialize(self) -> bool:
        """Write the header into an empty range. Returns True if it did."""
        if await self.store.fetch_range(self.table_name):
            return False
        await self.store.append_rows(self.table_name, [self.record.columns()])
        logger.info(f"{self.table_name}: header written")
        return True

    async def reset(self) -> None:
        """Drop every row and leave only the header."""
        await self.store.clear_range(self.table_name)
        await self.store.append_rows(self.table_name, [self.record.columns()])
        logger.warning(f"{self.table_name}: table reset")


class UsersTable(EntityTable[User]):
    table_name = "Users"
    record = User

    def defaults(self) -> Dict[str, Any]:
        return {"role": Role.CUSTOMER, "status": RecordStatus.ACTIVE, "created_at": now_timestamp()}

    async def find_by_email(self, email: str) -> Optional[User]:
        matches = await self.find_by("email", email)
        return matches[0] if matches else None


class CustomersTable(EntityTable[Customer]):
    table_name = "Customers"
    record = Customer

    def defaults(self) -> Dict[str, Any]:
        return {"status": RecordStatus.ACTIVE, "join_date": today()}

    async def find_by_email(self, email: str) -> Optional[Customer]:
        matches = await self.find_by("email", email)
        return matches[0] if matches else None

    async def list_by_package(self, package_id: str) -> List[Customer]:
        return await self.find_by("package_id", package_id)


class PackagesTable(EntityTable[Package]):
    table_name = "Packages"
    record = Package

    def defaults(self) -> Dict[str, Any]:
        return {"status": RecordStatus.ACTIVE, "description": ""}


class BillsTable(EntityTable[Bill]):
    table_name = "Bills"
    record = Bill

    def defaults(self) -> Dict[str, Any]:
        return {"status": BillStatus.UNPAID, "created_at": now_timestamp()}

    async def list_by_customer(self, customer_id: str) -> List[Bill]:
        return await self.find_by("customer_id", customer_id)

    async def find_for_period(self, customer_id: str, month: int, year: int) -> Optional[Bill]:
        for bill in await self.list_by_customer(customer_id):
            if bill.month == str(month) and bill.year == str(year):
                return bill
        return None


class PaymentsTable(EntityTable[Payment]):
    table_name = "Payments"
    record = Payment

    def defaults(self) -> Dict[str, Any]:
        return {"receipt_file": "", "notes": ""}

    async def list_by_bill(self, bill_id: str) -> List[Payment]:
        return await self.find_by("bill_id", bill_id)
