"""Create the local schema and seed a demo broker account with distribution set up."""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from leadhub.auth.jwt import create_access_token
from leadhub.core.config import get_config
from leadhub.database.db import create_schema, get_db_session
from leadhub.models import Broker, TeamMember
from leadhub.schemas.distribution import AllocationInput
from leadhub.services.distribution_service import DistributionService

DEMO_BROKER_EMAIL = "owner@demo-broker.com"


def seed_broker():
    create_schema()
    with get_db_session() as db:
        existing = db.query(Broker).filter(Broker.email == DEMO_BROKER_EMAIL).first()
        if existing:
            print(f"Seed broker already exists: {existing.id}")
            return existing.id

        print("Seeding demo broker...")
        broker = Broker(email=DEMO_BROKER_EMAIL, name="Dana Owner", company="Demo Finance")
        db.add(broker)
        db.flush()
        member = TeamMember(broker_id=broker.id, user_id="demo-closer", email="closer@demo-broker.com", name="Casey Closer")
        db.add(member)
        db.commit()

        DistributionService(db=db).save_settings(
            broker.id,
            enabled=True,
            allocations=[
                AllocationInput(user_id=broker.id, user_name=broker.name, percentage=60),
                AllocationInput(user_id=member.user_id, user_name=member.name, percentage=40),
            ],
        )
        print(f"Broker seeded: {broker.id}")
        return broker.id


if __name__ == "__main__":
    broker_id = seed_broker()
    config = get_config()
    token = create_access_token(
        user_id="admin", role="admin", secret=config.JWT_SECRET, ttl_minutes=config.JWT_ACCESS_TTL_MINUTES
    )
    print(f"Admin token ({config.JWT_ACCESS_TTL_MINUTES} min): {token}")
    print(f"Import into tenant {broker_id} via POST {config.API_PREFIX}/admin/import")
