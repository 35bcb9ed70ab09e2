import asyncio
from netbill.db.sheets import InMemoryRangeStore
from netbill.db.tables import CustomersTable


class InterleavingStore(InMemoryRangeStore):
    """
    Forces the schedule: first read, second read, second write, first write.
    The first writer is parked until the second writer has landed.
    """

    def __init__(self):
        super().__init__()
        self.armed = False
        self.first_read = asyncio.Event()
        self.second_write_done = asyncio.Event()
        self.reads = 0
        self.writes = 0

    async def fetch_range(self, table_name):
        rows = await super().fetch_range(table_name)
        if self.armed:
            self.reads += 1
            if self.reads == 1:
                self.first_read.set()
        return rows

    async def overwrite_range(self, table_name, rows):
        if not self.armed:
            return await super().overwrite_range(table_name, rows)
        self.writes += 1
        if self.writes == 1:
            await self.second_write_done.wait()
            await super().overwrite_range(table_name, rows)
        else:
            await super().overwrite_range(table_name, rows)
            self.second_write_done.set()


def test_concurrent_updates_lose_the_earlier_write():
    async def scenario():
        store = InterleavingStore()
        customers = CustomersTable(store)
        await customers.initialize()
        a = await customers.create({"name": "Ana", "email": "ana@example.com", "package_id": "p1"})
        b = await customers.create({"name": "Bruno", "email": "bruno@example.com", "package_id": "p1"})
        store.armed = True

        async def update_a():
            await customers.update(a.id, {"phone": "+15550000001"})

        async def update_b():
            await store.first_read.wait()
            await customers.update(b.id, {"phone": "+15550000002"})

        await asyncio.gather(update_a(), update_b())
        return store, a, b, {c.id: c for c in await customers.list_all()}

    store, a, b, final = asyncio.run(scenario())

    assert store.reads == 2
    assert store.writes == 2
    # A wrote last from a snapshot taken before B's write: B's change is gone
    assert final[a.id].phone == "+15550000001"
    assert final[b.id].phone == ""
    assert final[b.id] == b


def test_create_is_lost_when_overwritten_by_older_snapshot():
    async def scenario():
        store = InMemoryRangeStore()
        customers = CustomersTable(store)
        await customers.initialize()
        a = await customers.create({"name": "Ana", "email": "ana@example.com"})

        snapshot = await store.fetch_range("Customers")
        late = await customers.create({"name": "Carla", "email": "carla@example.com"})
        # an update that read before the append writes after it
        await store.overwrite_range("Customers", snapshot)
        return a, late, await customers.list_all()

    a, late, final = asyncio.run(scenario())
    assert [c.id for c in final] == [a.id]
    assert late.id not in {c.id for c in final}
