import threading

from sqlalchemy import select
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateSequence, CreateTable

from publicid.db import repository
from publicid.db.Models.models import PublicIdSequence, SystemConfig, public_id_seq
from publicid.services.providers import (
    DatabaseCounter,
    DatabaseSecretProvider,
    InMemoryCounter,
    InMemorySecretProvider,
    RedisCounter,
    RedisSecretProvider,
    secret_slot,
)
from publicid.services.sizing import size_band


class FakeRedis:
    """Just enough of redis.Redis for the providers."""

    def __init__(self):
        self.store = {}

    def set(self, key, value, nx=False):
        if nx and key in self.store:
            return None
        self.store[key] = value
        return True

    def get(self, key):
        return self.store.get(key)

    def incr(self, key):
        self.store[key] = int(self.store.get(key, 0)) + 1
        return self.store[key]


def test_database_secret_created_once(db_session):
    provider = DatabaseSecretProvider(db_session)
    first = provider.get_or_create_secret("default")
    second = provider.get_or_create_secret("default")

    assert first == second
    assert len(first) == 44  # base64 of 32 bytes
    row = db_session.query(SystemConfig).filter(SystemConfig.key == secret_slot("default")).one()
    assert row.value.encode("utf-8") == first


def test_database_secrets_are_per_namespace(db_session):
    provider = DatabaseSecretProvider(db_session)
    assert provider.get_or_create_secret("accounts") != provider.get_or_create_secret("orders")


def test_database_secret_survives_new_session(db_session):
    first = DatabaseSecretProvider(db_session).get_or_create_secret("default")
    db_session.expire_all()
    assert DatabaseSecretProvider(db_session).get_or_create_secret("default") == first


def test_insert_conflict_returns_stored_value(db_session, monkeypatch):
    """A writer that loses the insert race reads back the winner's value."""
    db_session.add(SystemConfig(key="slot", value="winner"))
    db_session.commit()
    # forget the winner so the insert reaches the database
    db_session.expunge_all()

    real_get = repository.get_config_value
    calls = []

    def stale_first_read(db, key):
        calls.append(key)
        if len(calls) == 1:
            return None
        return real_get(db, key)

    monkeypatch.setattr(repository, "get_config_value", stale_first_read)

    assert repository.insert_config_if_absent(db_session, "slot", "loser") == "winner"
    assert len(calls) == 2


def test_database_counter_starts_at_one(db_session):
    counter = DatabaseCounter(db_session)
    assert [counter.next() for _ in range(3)] == [1, 2, 3]


def test_redis_secret_created_once():
    client = FakeRedis()
    provider = RedisSecretProvider(client)
    first = provider.get_or_create_secret("default")
    assert provider.get_or_create_secret("default") == first
    assert client.store[secret_slot("default")].encode("utf-8") == first


def test_redis_secret_keeps_existing_value():
    client = FakeRedis()
    client.store[secret_slot("default")] = b"preexisting"
    assert RedisSecretProvider(client).get_or_create_secret("default") == b"preexisting"


def test_redis_counter_increments():
    counter = RedisCounter(FakeRedis(), "public_id_seq")
    assert [counter.next() for _ in range(3)] == [1, 2, 3]


def test_in_memory_counter_is_thread_safe():
    counter = InMemoryCounter()
    results = []
    lock = threading.Lock()

    def worker():
        values = [counter.next() for _ in range(500)]
        with lock:
            results.extend(values)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == list(range(1, 4001))


def test_in_memory_secret_provider_is_stable():
    provider = InMemorySecretProvider()
    assert provider.get_or_create_secret("a") == provider.get_or_create_secret("a")
    assert provider.get_or_create_secret("a") != provider.get_or_create_secret("b")


def test_sequence_table_is_64_bit_on_postgres():
    """Bands of length 7 and up outgrow a 32-bit SERIAL."""
    ddl = str(CreateTable(PublicIdSequence.__table__).compile(dialect=postgresql.dialect()))
    assert "BIGSERIAL" in ddl
    assert size_band(7, 29)[1] > 2 ** 31 - 1


def test_postgres_counter_uses_bigint_sequence():
    ddl = str(CreateSequence(public_id_seq).compile(dialect=postgresql.dialect()))
    assert "public_id_seq" in ddl
    assert "AS BIGINT" in ddl

    query = str(select(public_id_seq.next_value()).compile(dialect=postgresql.dialect()))
    assert "nextval('public_id_seq')" in query


def test_database_counter_reads_native_sequence():
    """On databases with sequences the counter comes from nextval, not table rows."""
    class FakeResult:
        def scalar_one(self):
            return 3_000_000_000

    class FakeSession:
        def __init__(self):
            self.statements = []
            self.committed = False

        def get_bind(self):
            return type("Bind", (), {"dialect": postgresql.dialect()})()

        def execute(self, statement):
            self.statements.append(statement)
            return FakeResult()

        def commit(self):
            self.committed = True

        def add(self, row):
            raise AssertionError("sequence path must not insert rows")

    session = FakeSession()
    assert DatabaseCounter(session).next() == 3_000_000_000
    assert session.committed
    assert "nextval('public_id_seq')" in str(session.statements[0].compile(dialect=postgresql.dialect()))
