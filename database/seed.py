"""
Seed an organization with its preset roles and an owner account.
Run after the database tables are created:

    python -m database.seed "Acme Ltd" owner@acme.test
"""
import sys
from typing import Optional

from sqlmodel import Session, select

from core.role_presets import ROLE_PRESETS
from database.connection import create_db_and_tables, engine
from database.models import Organization, Role, User


def seed_roles(session: Session, organization_id: str) -> dict[str, Role]:
    """Create any preset role the organization is missing. Returns roles by name."""
    role_map = {}
    for preset in ROLE_PRESETS.values():
        existing = session.exec(
            select(Role).where(
                Role.organization_id == organization_id,
                Role.name == preset["name"],
                Role.del_flag == False,  # noqa: E712
            )
        ).first()

        if existing:
            role_map[preset["name"]] = existing
        else:
            role = Role(
                organization_id=organization_id,
                **{**preset, "permissions": dict(preset["permissions"])},
            )
            session.add(role)
            session.flush()
            role_map[preset["name"]] = role

    return role_map


def seed_organization(
    session: Session,
    name: str,
    owner_email: str,
    owner_name: Optional[str] = None,
) -> tuple[Organization, User]:
    """Create an organization, its preset roles and an admin owner."""
    organization = Organization(name=name, email=owner_email)
    session.add(organization)
    session.flush()

    roles = seed_roles(session, organization.id)

    owner = User(
        organization_id=organization.id,
        role_id=roles["admin"].id,
        email=owner_email,
        name=owner_name,
    )
    session.add(owner)
    session.commit()
    session.refresh(organization)
    session.refresh(owner)
    return organization, owner


def get_role_by_name(session: Session, organization_id: str, role_name: str) -> Optional[Role]:
    """Get a non-deleted role of an organization by its name."""
    return session.exec(
        select(Role).where(
            Role.organization_id == organization_id,
            Role.name == role_name,
            Role.del_flag == False,  # noqa: E712
        )
    ).first()


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python -m database.seed <organization name> <owner email>")
        sys.exit(1)

    create_db_and_tables()
    with Session(engine) as session:
        org, user = seed_organization(session, sys.argv[1], sys.argv[2])
        print(f"Organization {org.id} created; owner {user.id} ({user.email})")
