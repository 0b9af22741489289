import os
import tempfile

# Point the application-level engine and log directory somewhere disposable
# before any paydesk module reads its settings.
_TMP_DIR = tempfile.mkdtemp(prefix="paydesk-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'app.db')}")
os.environ.setdefault("LOG_DIR", os.path.join(_TMP_DIR, "logs"))

from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from paydesk.database import build_engine, get_db, init_db  # noqa: E402
from paydesk.main import app  # noqa: E402
from paydesk.services.payment_lifecycle import PaymentLifecycle  # noqa: E402


class FixedClock:
    """Callable clock returning a settable aware datetime."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def __call__(self) -> datetime:
        return self.moment


@pytest.fixture
def engine(tmp_path):
    """A fresh SQLite file per test, with tables created and the gate seeded."""
    test_engine = build_engine(f"sqlite:///{tmp_path / 'payments.db'}")
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """API client whose requests use the per-test database."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    response = client.post("/api/admin/login", json={"username": "Abhay", "password": "Abhay123"})
    assert response.status_code == 200
    return {"admin-token": response.json()["token"]}


@pytest.fixture
def payment_form():
    """A valid submission."""
    return {
        "name": "Ravi Kumar",
        "phone": "9876543210",
        "address": "12 MG Road, Pune",
        "amount": 250,
    }


@pytest.fixture
def fixed_clock():
    return FixedClock(datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def make_payment(db_session):
    """Confirm a payment through the lifecycle and return the stored record."""
    def _make(name="Ravi Kumar", phone="9876543210", address="12 MG Road, Pune", amount=250, clock=None):
        return PaymentLifecycle(db_session, clock=clock).confirm(name, phone, address, amount)
    return _make
