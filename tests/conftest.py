"""
Shared pytest fixtures: an in-memory database, tenants, roles, users,
request contexts and an API client bound to the same session.
"""
import os

# Must be set before project modules read config.settings
os.environ["JWT_ACCESS_SECRET"] = "test-secret-key-for-testing-only-32-chars"
os.environ["DATABASE_URL"] = "sqlite://"

from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import database.models  # noqa: F401
from auth.context import RequestContext
from auth.token import create_access_token
from core.role_presets import ROLE_PRESETS
from database.connection import get_session
from database.models import Organization, Role, User, UserStatus


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_organization(session) -> Callable[..., Organization]:
    def _make(name: str = "Acme Ltd", **fields) -> Organization:
        organization = Organization(name=name, **fields)
        session.add(organization)
        session.commit()
        session.refresh(organization)
        return organization

    return _make


@pytest.fixture
def organization(make_organization) -> Organization:
    return make_organization()


@pytest.fixture
def other_organization(make_organization) -> Organization:
    return make_organization("Globex Inc")


@pytest.fixture
def make_role(session, organization) -> Callable[..., Role]:
    def _make(
        permissions: dict,
        name: str = "custom",
        organization_id: Optional[str] = None,
        del_flag: bool = False,
    ) -> Role:
        role = Role(
            organization_id=organization_id or organization.id,
            name=name,
            display_name=name.title(),
            permissions=dict(permissions),
            del_flag=del_flag,
        )
        session.add(role)
        session.commit()
        session.refresh(role)
        return role

    return _make


@pytest.fixture
def make_user(session, organization) -> Callable[..., User]:
    counter = {"n": 0}

    def _make(
        role: Optional[Role] = None,
        organization_id: Optional[str] = None,
        status: str = UserStatus.ACTIVE.value,
        del_flag: bool = False,
    ) -> User:
        counter["n"] += 1
        user = User(
            organization_id=organization_id or organization.id,
            role_id=role.id if role else None,
            email=f"user{counter['n']}@example.com",
            name=f"User {counter['n']}",
            status=status,
            del_flag=del_flag,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def admin_role(make_role) -> Role:
    return make_role(ROLE_PRESETS["ADMIN"]["permissions"], name="admin")


@pytest.fixture
def viewer_role(make_role) -> Role:
    return make_role(ROLE_PRESETS["VIEWER"]["permissions"], name="viewer")


@pytest.fixture
def admin_user(make_user, admin_role) -> User:
    return make_user(admin_role)


@pytest.fixture
def viewer_user(make_user, viewer_role) -> User:
    return make_user(viewer_role)


@pytest.fixture
def token_for() -> Callable[[User], str]:
    def _token(user: User, **kwargs) -> str:
        return create_access_token(user.id, email=user.email, name=user.name, **kwargs)

    return _token


@pytest.fixture
def make_ctx(session, token_for) -> Callable[..., RequestContext]:
    """RequestContext for a user, a raw token, or nobody."""

    def _make(user: Optional[User] = None, token: Optional[str] = None) -> RequestContext:
        if user is not None and token is None:
            token = token_for(user)
        return RequestContext(
            session=session,
            token=token,
            ip_address="203.0.113.7",
            user_agent="pytest-agent",
        )

    return _make


@pytest.fixture
def admin_ctx(make_ctx, admin_user) -> RequestContext:
    return make_ctx(admin_user)


@pytest.fixture
def client(session):
    from main import app

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(token_for) -> Callable[[User], dict]:
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {token_for(user)}"}

    return _headers
