import asyncio
import pytest
from netbill.core.errors import RecordNotFound, RemoteUnavailable
from netbill.db.session import Database
from netbill.db.sheets import InMemoryRangeStore
from netbill.db.tables import CustomersTable, PackagesTable, generate_id, to_base36
from netbill.schemas.customer import Customer


def customer_fields(name="Ana Souza", email="ana@example.com", package_id="pkg-1"):
    return {
        "name": name,
        "address": "12 Fiber Street, Springfield",
        "phone": "+15551234567",
        "email": email,
        "package_id": package_id,
    }


@pytest.fixture
def store():
    return InMemoryRangeStore()


@pytest.fixture
def customers(store):
    table = CustomersTable(store)
    asyncio.run(table.initialize())
    return table


def test_create_then_find_returns_equal_entity(customers):
    created = asyncio.run(customers.create(customer_fields()))
    found = asyncio.run(customers.find_by_id(created.id))

    assert created.id
    assert found == created
    assert created.status == "active"
    assert created.join_date


def test_generated_ids_are_distinct(customers):
    ids = {asyncio.run(customers.create(customer_fields(email=f"c{i}@example.com"))).id for i in range(25)}
    assert len(ids) == 25
    assert len({generate_id() for _ in range(1000)}) == 1000


def test_base36_rendering():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    assert to_base36(36 ** 3 + 1) == "1001"


def test_supplied_id_is_ignored_on_create(customers):
    created = asyncio.run(customers.create({**customer_fields(), "id": "chosen-by-caller"}))
    assert created.id != "chosen-by-caller"


def test_list_all_is_stable_without_mutation(customers):
    asyncio.run(customers.create(customer_fields()))
    asyncio.run(customers.create(customer_fields(name="Bruno Lima", email="bruno@example.com")))

    first = asyncio.run(customers.list_all())
    second = asyncio.run(customers.list_all())
    assert first == second
    assert len(first) == 2


def test_empty_range_lists_nothing(store):
    assert asyncio.run(CustomersTable(store).list_all()) == []


def test_update_changes_only_the_requested_field(customers, store):
    a = asyncio.run(customers.create(customer_fields()))
    b = asyncio.run(customers.create(customer_fields(name="Bruno Lima", email="bruno@example.com")))
    rows_before = store.rows("Customers")

    updated = asyncio.run(customers.update(a.id, {"phone": "+15559999999"}))

    assert updated.phone == "+15559999999"
    assert updated.model_dump(exclude={"phone"}) == a.model_dump(exclude={"phone"})
    assert asyncio.run(customers.find_by_id(b.id)) == b

    rows_after = store.rows("Customers")
    assert rows_after[0] == Customer.columns()
    # B's row is byte-for-byte the same
    b_row = next(r for r in rows_before if r and r[0] == b.id)
    assert b_row in rows_after


def test_update_accepts_column_names(customers):
    a = asyncio.run(customers.create(customer_fields()))
    updated = asyncio.run(customers.update(a.id, {"Status": "inactive"}))
    assert updated.status == "inactive"


def test_update_rejects_unknown_fields_and_id_changes(customers):
    a = asyncio.run(customers.create(customer_fields()))
    with pytest.raises(ValueError):
        asyncio.run(customers.update(a.id, {"Nickname": "ana"}))
    with pytest.raises(ValueError):
        asyncio.run(customers.update(a.id, {"id": "other"}))


def test_missing_ids(customers):
    assert asyncio.run(customers.find_by_id("nope")) is None
    with pytest.raises(RecordNotFound) as exc:
        asyncio.run(customers.update("nope", {"name": "X"}))
    assert exc.value.table == "Customers"
    assert exc.value.record_id == "nope"
    with pytest.raises(RecordNotFound):
        asyncio.run(customers.delete("nope"))


def test_short_rows_decode_missing_cells_as_empty():
    store = InMemoryRangeStore({
        "Customers": [
            Customer.columns(),
            ["c1", "Ana Souza", "12 Fiber Street"],
        ]
    })
    [customer] = asyncio.run(CustomersTable(store).list_all())

    assert customer.id == "c1"
    assert customer.address == "12 Fiber Street"
    assert customer.phone == ""
    assert customer.package_id == ""
    assert customer.join_date == ""


def test_trailing_blank_cells_survive_round_trip(customers):
    # the store trims trailing blanks on fetch, like the Sheets API does
    created = asyncio.run(customers.create({**customer_fields(), "status": "active"}))
    asyncio.run(customers.update(created.id, {"join_date": ""}))
    found = asyncio.run(customers.find_by_id(created.id))
    assert found.join_date == ""
    assert found.status == "active"


def test_foreign_header_columns_are_ignored_and_dropped_on_rewrite():
    store = InMemoryRangeStore({
        "Packages": [
            ["ID", "Legacy_Code", "Name", "Speed", "Price", "Status", "Description"],
            ["p1", "OLD-7", "Basic", "10", "15", "active", ""],
        ]
    })
    packages = PackagesTable(store)
    [package] = asyncio.run(packages.list_all())
    assert package.name == "Basic"

    asyncio.run(packages.update("p1", {"price": 20}))
    assert store.rows("Packages")[0] == ["ID", "Name", "Speed", "Price", "Status", "Description"]
    assert store.rows("Packages")[1] == ["p1", "Basic", "10", "20", "active", ""]


def test_numbers_are_stored_as_text(store):
    packages = PackagesTable(store)
    asyncio.run(packages.initialize())
    created = asyncio.run(packages.create({"name": "Basic", "speed": 10, "price": 15}))

    assert created.speed == "10"
    assert created.price == "15"
    assert asyncio.run(packages.find_by_id(created.id)) == created


def test_delete_rewrites_table_without_row(customers, store):
    a = asyncio.run(customers.create(customer_fields()))
    b = asyncio.run(customers.create(customer_fields(name="Bruno Lima", email="bruno@example.com")))

    removed = asyncio.run(customers.delete(a.id))

    assert removed == a
    assert asyncio.run(customers.list_all()) == [b]
    assert len(store.rows("Customers")) == 2


def test_initialize_and_reset(store):
    db = Database(store)
    created = asyncio.run(db.initialize())
    assert created == ["Users", "Customers", "Packages", "Bills", "Payments"]
    assert asyncio.run(db.initialize()) == []

    asyncio.run(db.customers.create(customer_fields()))
    asyncio.run(db.customers.reset())
    assert store.rows("Customers") == [Customer.columns()]


def test_find_helpers(store):
    db = Database(store)
    asyncio.run(db.initialize())
    ana = asyncio.run(db.customers.create(customer_fields()))
    asyncio.run(db.customers.create(customer_fields(name="Bruno Lima", email="bruno@example.com", package_id="pkg-2")))
    bill = asyncio.run(db.bills.create({"customer_id": ana.id, "package_id": "pkg-1", "month": 3, "year": 2024, "amount": 15}))
    asyncio.run(db.payments.create({"bill_id": bill.id, "amount": 15, "payment_method": "cash"}))

    assert asyncio.run(db.customers.find_by_email("ana@example.com")) == ana
    assert asyncio.run(db.customers.find_by_email("nobody@example.com")) is None
    assert [c.id for c in asyncio.run(db.customers.list_by_package("pkg-1"))] == [ana.id]
    assert asyncio.run(db.bills.list_by_customer(ana.id)) == [bill]
    assert asyncio.run(db.bills.find_for_period(ana.id, 3, 2024)) == bill
    assert asyncio.run(db.bills.find_for_period(ana.id, 4, 2024)) is None
    assert len(asyncio.run(db.payments.list_by_bill(bill.id))) == 1


def test_table_defaults(store):
    db = Database(store)
    asyncio.run(db.initialize())
    user = asyncio.run(db.users.create({"username": "ops", "email": "ops@example.com", "password": "hashed"}))
    bill = asyncio.run(db.bills.create({"customer_id": "c1", "package_id": "p1", "month": 1, "year": 2024, "amount": 15}))
    payment = asyncio.run(db.payments.create({"bill_id": bill.id, "amount": 15}))

    assert user.role == "customer"
    assert user.status == "active"
    assert len(user.created_at) == len("2024-01-01 00:00:00")
    assert bill.status == "unpaid"
    assert payment.notes == ""
    assert payment.receipt_file == ""


class FailingStore(InMemoryRangeStore):
    async def fetch_range(self, table_name):
        raise RemoteUnavailable(table_name, "fetch", OSError("connection reset"))


def test_remote_failures_propagate():
    customers = CustomersTable(FailingStore())
    with pytest.raises(RemoteUnavailable):
        asyncio.run(customers.list_all())
    with pytest.raises(RemoteUnavailable):
        asyncio.run(customers.update("c1", {"name": "X"}))
