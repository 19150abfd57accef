"""Pytest fixtures for the loyalty ledger tests."""

import os

os.environ.setdefault("LOYALTY_DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("LOYALTY_SCHEDULER_ENABLED", "false")

from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from loyalty_ledger.core.database import Base, get_db  # noqa: E402
from loyalty_ledger.main import create_app  # noqa: E402
from loyalty_ledger.models import Profile, ProfileRole, Transaction, TransactionType  # noqa: E402
from loyalty_ledger.utils.datetime import utcnow  # noqa: E402


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Session configured like the application's SessionLocal."""
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)()
    yield session
    session.close()


@pytest.fixture
def client(db_session):
    """Test client sharing the test session."""
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)


@pytest.fixture
def make_profile(db_session):
    """Factory for committed profiles with preset counters."""

    def _make(
        full_name="Client",
        *,
        role=ProfileRole.CLIENT,
        points=0,
        monthly_points=0,
        total_points_accumulated=0,
        created_at=None,
        whatsapp=None,
    ):
        profile = Profile(
            full_name=full_name,
            whatsapp=whatsapp,
            role=role,
            points=points,
            monthly_points=monthly_points,
            total_points_accumulated=total_points_accumulated,
            created_at=created_at or utcnow(),
        )
        db_session.add(profile)
        db_session.commit()
        return profile

    return _make


@pytest.fixture
def make_earn(db_session):
    """Factory for back-dated earn transactions."""

    def _make(profile, *, created_at, amount=1, description="Visit"):
        transaction = Transaction(
            user_id=profile.id,
            type=TransactionType.EARN,
            amount=amount,
            description=description,
            created_at=created_at,
        )
        db_session.add(transaction)
        db_session.commit()
        return transaction

    return _make


@pytest.fixture
def admin_user(make_profile):
    return make_profile("Shop Admin", role=ProfileRole.ADMIN)


@pytest.fixture
def client_user(make_profile):
    return make_profile("Lucia Fernandez", points=50, monthly_points=20, total_points_accumulated=80)


@pytest.fixture
def admin_headers(admin_user):
    return {"X-Actor-Id": str(admin_user.id)}


@pytest.fixture
def client_headers(client_user):
    return {"X-Actor-Id": str(client_user.id)}


@pytest.fixture
def days_ago():
    """Naive UTC timestamp ``n`` days before now."""

    def _days_ago(n, now=None):
        return (now or utcnow()) - timedelta(days=n)

    return _days_ago


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 15, 12, 0, 0)
