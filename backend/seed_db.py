"""
Job Board Database Seeder

Creates the tables and a demo poster (Dr. Maya Patel) with a few jobs:
- Registered through the User Directory (bcrypt-hashed password)
- Jobs posted through the Job Catalog, spread over several posting dates
"""

import sys
sys.path.insert(0, ".")

from datetime import date, timedelta

from app.core.config import settings
from app.core.errors import StoreError
from app.db.session import engine, init_db
from app.services import CredentialService, JobCatalog, UserDirectory
from app.store.record_store import SQLAlchemyRecordStore

DEMO_EMAIL = "maya.patel@ihospitaljobs.com"

DEMO_JOBS = [
    ("Registered Nurse", "St. Mary's Hospital", "Boston, MA", "Full-time", "$78,000"),
    ("ICU Nurse", "General Hospital", "Chicago, IL", "Full-time", "$85,000"),
    ("Pharmacist", "CityCare Clinic", "Austin, TX", "Part-time", "$60/hr"),
    ("Radiology Technician", "Northside Medical", "Denver, CO", "Contract", "$45/hr"),
]


def seed_database():
    """Seed the database with test data."""

    # Create all tables
    init_db(engine)

    store = SQLAlchemyRecordStore(engine)
    credentials = CredentialService(store)
    users = UserDirectory(store, credentials)
    jobs = JobCatalog(store, enforce_ownership=settings.ENFORCE_JOB_OWNERSHIP)

    try:
        # Check if already seeded
        if users.exists_by_email(DEMO_EMAIL):
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Create the poster
        users.register(
            firstname="Maya",
            lastname="Patel",
            email=DEMO_EMAIL,
            password="poster123",
            gender="female",
            dob=date(1986, 4, 12),
        )
        poster = users.find_by_email(DEMO_EMAIL)
        users.update_profile(poster["u_id"], "Head of Nursing", "MSN, RN")

        # 2. Post her jobs, one day apart
        today = date.today()
        for offset, (title, company, location, job_type, salary) in enumerate(DEMO_JOBS):
            jobs.create(
                owner_id=poster["u_id"],
                title=title,
                company=company,
                location=location,
                job_type=job_type,
                apply_link=f"https://ihospitaljobs.com/apply/{offset + 1}",
                date=today - timedelta(days=offset),
                contact=DEMO_EMAIL,
                salary=salary,
            )

        print("✅ Database seeded successfully!")
        print("\n📋 Created Users:")
        print(f"   - {DEMO_EMAIL} (password: poster123)")
        print(f"\n🏥 Posted {len(DEMO_JOBS)} jobs")

    except StoreError as e:
        print(f"❌ Error seeding database: {e.message}")
        raise


if __name__ == "__main__":
    seed_database()
