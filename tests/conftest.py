# tests/conftest.py: Shared test fixtures
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.core.hashing import Hasher
from app.core.security import create_access_token
from app.db.models.board import BoardColumn, Project, ProjectMember
from app.db.models.user import User, ROLE_ADMIN, ROLE_DEVELOPER
from app.db.seed import add_default_columns, seed_demo_project
from app.db.session import Database
from app.main import create_app

TEST_SETTINGS = Settings(
    DATABASE_URL="sqlite://",
    SECRET_KEY="test-secret-key-for-unit-tests-only",
    ENV="test",
    LOG_LEVEL="WARNING",
    AUTO_MIGRATE=False,
    SEED_DATA=False,
)

ADMIN_PASSWORD = "admin123"
DEVELOPER_PASSWORD = "devpass1"


@pytest.fixture(scope="function")
def database():
    database = Database(TEST_SETTINGS.DATABASE_URL)
    database.create_all()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture(scope="function")
def db(database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def app(database):
    return create_app(TEST_SETTINGS, database)


@pytest.fixture(scope="function")
def client(app):
    """HTTP test client bound to the in-memory database"""
    return TestClient(app)


def _make_user(db, email: str, name: str, password: str, role: str) -> User:
    user = User(
        email=email,
        name=name,
        password_hash=Hasher.hash_password(password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    """Create an admin user"""
    return _make_user(db, "admin@example.com", "Admin", ADMIN_PASSWORD, ROLE_ADMIN)


@pytest.fixture
def developer(db):
    """Create a developer who is a member of ``project``"""
    return _make_user(db, "dev@example.com", "Dev User", DEVELOPER_PASSWORD, ROLE_DEVELOPER)


@pytest.fixture
def outsider(db):
    """Create a developer with no project memberships"""
    return _make_user(db, "outsider@example.com", "Out Sider", "outside1", ROLE_DEVELOPER)


@pytest.fixture
def project(db, admin_user, developer):
    """DEMO project with the default columns; admin and developer are members"""
    project = seed_demo_project(db, admin_user)
    db.add(ProjectMember(project_id=project.id, user_id=developer.id))
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def columns(db, project):
    return (
        db.query(BoardColumn)
        .filter(BoardColumn.project_id == project.id)
        .order_by(BoardColumn.position)
        .all()
    )


@pytest.fixture
def other_project(db, admin_user):
    """A second project the developer is not a member of"""
    project = Project(code="OTHER", name="Other Project")
    db.add(project)
    db.flush()
    db.add(ProjectMember(project_id=project.id, user_id=admin_user.id))
    add_default_columns(db, project)
    db.commit()
    db.refresh(project)
    return project


def get_auth_headers(user: User) -> dict:
    """Generate auth headers for a user"""
    token = create_access_token(user, TEST_SETTINGS)
    return {"Authorization": f"Bearer {token}"}


def create_task(client: TestClient, user: User, project_id: int, column_id: int, title: str, **fields) -> dict:
    resp = client.post(
        "/tasks",
        json={"projectId": project_id, "columnId": column_id, "title": title, **fields},
        headers=get_auth_headers(user),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def column_task_ids(client: TestClient, user: User, project_id: int, column_id: int) -> list:
    resp = client.get(f"/tasks/by-project/{project_id}", headers=get_auth_headers(user))
    assert resp.status_code == 200, resp.text
    return [task["id"] for task in resp.json()["data"]["tasksByColumn"][str(column_id)]]
