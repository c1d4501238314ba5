import os

# musi byc ustawione przed importem pocketcashier (settings sa cache'owane)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_TABLES"] = "false"
os.environ["RESEND_API_KEY"] = ""
os.environ["SQUARE_ACCESS_TOKEN"] = ""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import pocketcashier.data.models  # noqa: F401
from pocketcashier.api.deps import get_notifier, get_square_client
from pocketcashier.data.database import Base, get_db
from pocketcashier.data.models import BusinessModel, BusinessSettingsModel, ProductModel, MenuItemModel
from pocketcashier.domain.exceptions import UpstreamError
from pocketcashier.main import create_app
from pocketcashier.services.notification_service import BestEffort
from pocketcashier.utils.settings import Settings, get_settings

BUSINESS_ID = "biz-001"
OTHER_BUSINESS_ID = "biz-002"


class FakeNotifier:
    def __init__(self, accept=True):
        self.accept = accept
        self.calls = []

    def order_paid(self, order_id, business_id, payment_id):
        self.calls.append(("order_paid", order_id, business_id, payment_id))
        return self._result()

    def booking_confirmed(self, booking_id):
        self.calls.append(("booking_confirmed", booking_id))
        return self._result()

    def capture_lead(self, business_id, customer_email, customer_name):
        self.calls.append(("capture_lead", business_id, customer_email, customer_name))
        return self._result()

    def _result(self):
        if self.accept:
            return BestEffort(accepted=True, task_id=f"task-{len(self.calls)}")
        return BestEffort(accepted=False, reason="broker unavailable")


class FakeSquare:
    """Square deduplikuje po idempotency key, tu tak samo."""

    def __init__(self, status="COMPLETED", error=None):
        self.status = status
        self.error = error
        self.calls = []
        self._payments = {}

    def create_payment(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise UpstreamError(f"Payment processing failed: {self.error}")
        key = kwargs["idempotency_key"]
        if key not in self._payments:
            self._payments[key] = {"id": f"pay-{len(self._payments) + 1}", "status": self.status}
        return self._payments[key]


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def settings():
    return Settings(database_url="sqlite://", square_access_token="sq-test-token")


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def square():
    return FakeSquare()


@pytest.fixture()
def seeded(db):
    db.add_all([
        BusinessModel(id=BUSINESS_ID, name="Corner Bakery", square_location_id="LOC-1"),
        BusinessModel(id=OTHER_BUSINESS_ID, name="No Square Shop", square_location_id=None),
        BusinessSettingsModel(business_id=BUSINESS_ID, admin_email="owner@bakery.test", order_prefix="BAK-"),
        ProductModel(id="prod-mug", business_id=BUSINESS_ID, name="Mug", price_cents=500),
        ProductModel(id="prod-old", business_id=BUSINESS_ID, name="Retired", price_cents=100, is_active=False),
        MenuItemModel(id="svc-cut", business_id=BUSINESS_ID, name="Haircut", price=Decimal("25.50")),
    ])
    db.commit()
    return db


@pytest.fixture()
def client(session_factory, settings, notifier, square, seeded):
    app = create_app()

    def override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_square_client] = lambda: square
    return TestClient(app)
