"""
Seed script - populates the database with demo users, profiles and activity.

Usage:
    python -m scripts.seed

The demo users are picked so every matching case shows up for the dev
user: a two-way match, two one-way matches, and a user with no overlap.

This script is IDEMPOTENT - running it twice won't create duplicates.
It checks for existing data before inserting.
"""
import asyncio
import sys
import os
from datetime import datetime, timedelta, timezone

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from app.core.database import async_session_maker, init_db
from app.core.security import hash_password
from app.models.user import User
from app.models.profile import Profile
from app.models.pair_request import PairRequest, RequestStatus
from app.models.skill_session import SkillSession, SessionStatus
from app.services.analytics_service import AnalyticsService


# ─── Accounts ──────────────────────────────────────────────────

DEMO_PASSWORD = "password123"

ADMIN_USER = {
    "email": "admin@skillx.dev",
    "password": "admin12345",
    "full_name": "Admin User",
}

# (email, full name, teach skills, learn skills, bio)
DEMO_USERS = [
    ("dev@skillx.dev", "Dev User", ["Python", "Guitar"], ["Spanish", "UI/UX Design"],
     "Backend developer, weekend guitarist."),
    ("maria@skillx.dev", "Maria Lopez", ["Spanish", "Cooking"], ["Python"],
     "Native Spanish speaker learning to code."),
    ("sam@skillx.dev", "Sam Carter", ["Figma"], ["Guitar"],
     "Product designer who wants to play music."),
    ("lee@skillx.dev", "Lee Park", ["UI/UX Design", "Korean"], ["Piano"],
     "Designer, happy to review portfolios."),
    ("nina@skillx.dev", "Nina Rossi", ["Italian"], ["Photography"],
     "No overlap with the dev user on purpose."),
]


async def _get_or_create_user(db, email, full_name, password, is_admin=False):
    user = (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()
    if user is not None:
        return user, False
    user = User(
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        is_admin=is_admin,
    )
    db.add(user)
    await db.flush()
    return user, True


async def seed():
    """Run the seed process."""
    print("Seeding database...")

    # Initialize tables
    await init_db()
    print("  Tables created")

    async with async_session_maker() as db:

        # ── Users + profiles ───────────────────────────────
        _, created = await _get_or_create_user(
            db,
            ADMIN_USER["email"],
            ADMIN_USER["full_name"],
            ADMIN_USER["password"],
            is_admin=True,
        )
        if created:
            print(f"  Created admin: {ADMIN_USER['email']}")

        users = {}
        for email, full_name, teach, learn, bio in DEMO_USERS:
            user, created = await _get_or_create_user(db, email, full_name, DEMO_PASSWORD)
            users[email] = user
            if not created:
                continue
            db.add(Profile(
                user_id=user.id,
                teach_skills=teach,
                learn_skills=learn,
                bio=bio,
                is_public=True,
            ))
            print(f"  Created user + profile: {email}")
        await db.flush()

        dev = users["dev@skillx.dev"]
        maria = users["maria@skillx.dev"]
        sam = users["sam@skillx.dev"]

        # ── Requests + a session ───────────────────────────
        existing = await db.execute(
            select(PairRequest).where(PairRequest.requester_id == dev.id).limit(1)
        )
        if existing.scalar_one_or_none():
            print("  Requests already exist, skipping...")
        else:
            accepted = PairRequest(
                requester_id=dev.id,
                requested_id=maria.id,
                skill="Spanish",
                message="Would love conversation practice!",
                status=RequestStatus.ACCEPTED.value,
            )
            pending = PairRequest(
                requester_id=sam.id,
                requested_id=dev.id,
                skill="Guitar",
                message="Could you show me some chords?",
                status=RequestStatus.PENDING.value,
            )
            db.add_all([accepted, pending])
            await db.flush()

            # The accepting side (maria) teaches
            db.add(SkillSession(
                pair_request_id=accepted.id,
                teacher_id=maria.id,
                learner_id=dev.id,
                skill=accepted.skill,
                scheduled_date=datetime.now(timezone.utc) + timedelta(days=2),
                duration_minutes=60,
                meeting_link="https://meet.example.com/skillx-spanish",
                status=SessionStatus.SCHEDULED.value,
            ))
            await db.flush()
            print("  Created 2 requests and 1 session")

        # Commit everything
        await db.commit()

        # ── Analytics rollups ──────────────────────────────
        rebuilt = await AnalyticsService().rebuild(db)
        print(f"  Analytics rebuilt: {rebuilt.skills} skills, {rebuilt.users} users")

        print()
        print("Seed complete!")
        print(f"  Login: dev@skillx.dev / {DEMO_PASSWORD}")
        print(f"  Admin: {ADMIN_USER['email']} / {ADMIN_USER['password']}")


if __name__ == "__main__":
    asyncio.run(seed())
