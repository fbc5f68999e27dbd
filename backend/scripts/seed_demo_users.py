"""
Seed one user per role for local development and print a bearer token for each.

A property is created and assigned to the demo property manager, and tenant
and vendor profiles are linked to their portal users, so every scope rule
can be exercised from a browser or curl.

Usage:
    python -m scripts.seed_demo_users
"""
import asyncio
import os
import sys

# Add parent directory to path to import ultrabms modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from ultrabms.auth.matrix import Role, build_default_matrix
from ultrabms.database import AsyncSessionLocal
from ultrabms.models import Property, Tenant, User, Vendor
from ultrabms.security.token_inspection import create_access_token

DEMO_DOMAIN = "demo.ultrabms.local"


async def _get_or_create_user(session, role: Role) -> User:
    email = f"{role.value.lower()}@{DEMO_DOMAIN}"
    user = (await session.execute(select(User).where(User.email == email))).scalar_one_or_none()
    if user is None:
        user = User(email=email, full_name=role.value.replace("_", " ").title(), role=role.value)
        session.add(user)
        await session.flush()
    return user


async def seed_demo_users():
    matrix = build_default_matrix()

    async with AsyncSessionLocal() as session:
        async with session.begin():
            users = {role: await _get_or_create_user(session, role) for role in Role}

            prop = (
                await session.execute(
                    select(Property).where(Property.manager_id == users[Role.PROPERTY_MANAGER].id)
                )
            ).scalar_one_or_none()
            if prop is None:
                prop = Property(
                    name="Demo Towers",
                    address="1 Demo Street",
                    total_units=12,
                    manager_id=users[Role.PROPERTY_MANAGER].id,
                )
                session.add(prop)
                await session.flush()

            tenant_user = users[Role.TENANT]
            if (
                await session.execute(select(Tenant).where(Tenant.user_id == tenant_user.id))
            ).scalar_one_or_none() is None:
                session.add(
                    Tenant(
                        user_id=tenant_user.id,
                        property_id=prop.id,
                        first_name="Demo",
                        last_name="Tenant",
                        email=tenant_user.email,
                    )
                )

            vendor_user = users[Role.VENDOR]
            if (
                await session.execute(select(Vendor).where(Vendor.user_id == vendor_user.id))
            ).scalar_one_or_none() is None:
                session.add(
                    Vendor(
                        user_id=vendor_user.id,
                        company_name="Demo Plumbing LLC",
                        email=vendor_user.email,
                        service_category="PLUMBING",
                    )
                )

    for role, user in users.items():
        print(f"\n{role.value} <{user.email}>")
        print(f"  permissions: {len(matrix.permissions_for(role))}")
        print(f"  token: {create_access_token(str(user.id))}")


if __name__ == "__main__":
    asyncio.run(seed_demo_users())
