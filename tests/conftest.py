"""Pytest configuration and fixtures."""

import os

# Force testing environment before the application is imported
os.environ["TESTING"] = "true"

from types import SimpleNamespace
from typing import Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from outage_journal.core.constants import Role
from outage_journal.core.database import Base
from outage_journal.core.deps import get_db
from outage_journal.core.security import create_access_token
from outage_journal.main import create_application
from outage_journal.models import Cell, Line, Substation, Tp
from outage_journal.schemas.user import UserCreate
from outage_journal.services.user import UserService

# Use SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PASSWORD = "secret-password"


@pytest.fixture(scope="function")
async def test_engine():
    """Create a test engine for each test function."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables and dispose engine
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
def app(test_session):
    """Application with the database dependency pointed at the test session."""
    app = create_application()

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(app):
    """Async HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def user_password():
    """Password shared by the per-role users."""
    return PASSWORD


@pytest.fixture
async def users(test_session) -> Dict[Role, object]:
    """One user per role."""
    service = UserService(test_session)
    created = {}
    for role in Role:
        created[role] = await service.create(
            UserCreate(
                username=role.value.lower(),
                password=PASSWORD,
                name=f"{role.value.title()} User",
                role=role,
            )
        )
    return created


@pytest.fixture
def auth_headers(users):
    """Build bearer headers for the user holding ``role``."""

    def _headers(role: Role) -> Dict[str, str]:
        user = users[role]
        token = create_access_token(subject=user.username, role=user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def network(test_session):
    """Two substations, three cells, three lines and two TPs with predictable ids."""
    north = Substation(name="PS North", voltage_class="110 kV", district="Northern")
    south = Substation(name="PS South", voltage_class="35 kV", district="Southern")
    test_session.add_all([north, south])
    await test_session.flush()

    cells = [
        Cell(name="Cell 1", voltage_class="10 kV", substation_id=north.id),
        Cell(name="Cell 2", voltage_class="10 kV", substation_id=north.id),
        Cell(name="Cell 5", voltage_class="6 kV", substation_id=south.id),
    ]
    test_session.add_all(cells)
    await test_session.flush()

    lines = [
        Line(name="Feeder 101", voltage_class="10 kV", line_type="overhead", source_cell_id=cells[0].id),
        Line(name="Feeder 102", voltage_class="10 kV", line_type="cable", source_cell_id=cells[1].id),
        Line(name="Feeder 6", voltage_class="6 kV", line_type="cable", source_cell_id=cells[2].id),
    ]
    test_session.add_all(lines)
    await test_session.flush()

    tps = [
        Tp(name="TP-101", voltage_class="10/0.4 kV", capacity="400 kVA", feeder_id=lines[0].id),
        Tp(name="TP-205", voltage_class="6/0.4 kV", capacity="630 kVA", feeder_id=lines[2].id),
    ]
    test_session.add_all(tps)
    await test_session.commit()

    return SimpleNamespace(substations=[north, south], cells=cells, lines=lines, tps=tps)
