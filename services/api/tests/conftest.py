import base64
import os

import pytest
from booklend.core.config import Settings
from booklend.core.security import hash_password
from booklend.db.session import create_db_engine, get_db
from booklend.main import create_app
from booklend.models import Base, Book, User
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

ADMIN_EMAIL = "librarian@example.com"
ADMIN_PASSWORD = "shelves-and-stacks"
READER_EMAIL = "reader@example.com"
READER_PASSWORD = "dog-eared-pages"


def basic_auth(email: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture(scope="session")
def engine():
    # Override at runtime: TEST_DATABASE_URL=postgresql+psycopg://... pytest
    url = os.getenv("TEST_DATABASE_URL") or "sqlite+pysqlite:///:memory:"
    eng = create_db_engine(url)

    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def db_session(engine):
    connection = engine.connect()
    tx = connection.begin()

    # Commits inside the code under test only release savepoints; the outer
    # transaction is rolled back after every test.
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=connection,
        join_transaction_mode="create_savepoint",
    )
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        tx.rollback()
        connection.close()


@pytest.fixture()
def test_settings():
    return Settings(
        database_url="sqlite+pysqlite:///:memory:",
        auto_create_tables=False,
        password_hash_rounds=4,
        rate_limit_enabled=False,
        bootstrap_admin_email=None,
        bootstrap_admin_password=None,
        otel_enabled=False,
    )


@pytest.fixture()
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture()
def client(app, db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def configure(app, test_settings):
    """Swap settings seen by request handlers, e.g. configure(approval_conflict_check=True)."""

    def _configure(**overrides):
        app.state.settings = test_settings.model_copy(update=overrides)
        return app.state.settings

    return _configure


@pytest.fixture()
def make_user(app, db_session):
    def _make_user(email: str, password: str, *, is_admin: bool = False) -> User:
        u = User(
            email=email,
            password_hash=hash_password(app.state.pwd_context, password),
            is_admin=is_admin,
        )
        db_session.add(u)
        db_session.commit()
        return u

    return _make_user


@pytest.fixture()
def admin(make_user):
    return make_user(ADMIN_EMAIL, ADMIN_PASSWORD, is_admin=True)


@pytest.fixture()
def reader(make_user):
    return make_user(READER_EMAIL, READER_PASSWORD)


@pytest.fixture()
def admin_headers(admin):
    return basic_auth(ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture()
def reader_headers(reader):
    return basic_auth(READER_EMAIL, READER_PASSWORD)


@pytest.fixture()
def book(db_session):
    b = Book(title="The Name of the Rose", author="Umberto Eco")
    db_session.add(b)
    db_session.commit()
    return b
