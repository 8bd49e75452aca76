import pytest
import os
from datetime import datetime, timezone
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_PER_MINUTE"] = "1000"

from effitrack.database import Base, get_db
from effitrack.main import app
from effitrack.services.mail_service import MailTransport, get_mail_transport
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# pysqlite's implicit transaction handling breaks SAVEPOINT; emit BEGIN ourselves
@event.listens_for(engine, "connect")
def _disable_pysqlite_transactions(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None

@event.listens_for(engine, "begin")
def _emit_begin(conn):
    conn.exec_driver_sql("BEGIN")
# Services commit and roll back freely; inside a test those map onto savepoints
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine, join_transaction_mode="create_savepoint"
)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


class RecordingTransport(MailTransport):
    """In-memory transport; addresses listed in `fail_for` raise like a provider error would."""

    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.sent = []

    def send_email(self, to, subject, html):
        if not to or to in self.fail_for:
            raise RuntimeError(f"provider rejected {to}")
        self.sent.append({"to": to, "subject": subject, "html": html})


@pytest.fixture(scope="function")
def transport():
    return RecordingTransport()


@pytest.fixture(scope="function")
def make_employee(db_session):
    from effitrack.models.employee import Employee

    counter = {"n": 0}

    def _make(name, email=None, status="active", **kwargs):
        counter["n"] += 1
        # Explicit, increasing created_at keeps insertion order unambiguous
        kwargs.setdefault("created_at", datetime(2026, 1, 1, 0, 0, counter["n"], tzinfo=timezone.utc))
        employee = Employee(
            name=name,
            email=f"{name.lower()}@example.com" if email is None else email,
            status=status,
            **kwargs,
        )
        db_session.add(employee)
        db_session.commit()
        return employee
    return _make


@pytest.fixture(scope="function")
def client(db_session, transport):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_transport] = lambda: transport
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
