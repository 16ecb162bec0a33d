# tests/test_services.py
import unittest
from datetime import datetime, timedelta, timezone

from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    DuplicateRequestException,
    ForbiddenException,
    InvalidTransitionException,
    ProfileValidationException,
    SessionNotFoundException,
)
from app.schemas.pair_request import PairRequestCreate
from app.schemas.profile import DiscoverFilters, ProfileUpdate
from app.schemas.session import SessionCreate, SessionUpdate
from app.services.analytics_service import AnalyticsService
from app.services.match_service import MatchService
from app.services.profile_service import ProfileService
from app.services.request_service import RequestService
from app.services.session_service import SessionService
from tests.base import DatabaseTestCase


class TestProfileService(DatabaseTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.service = ProfileService()
        self.user = await self.create_user("ana@example.com", "Ana")

    async def test_missing_profile_is_none(self):
        self.assertIsNone(await self.service.get_profile(self.db, self.user))

    async def test_save_is_idempotent(self):
        data = ProfileUpdate(teach_skills=["Python", " Python "], learn_skills=["Guitar"], bio="Hi")

        first = await self.service.save_profile(self.db, self.user, data)
        second = await self.service.save_profile(self.db, self.user, data)

        self.assertEqual(first.id, second.id)
        self.assertEqual(second.teach_skills, ["Python"])
        self.assertEqual(second.learn_skills, ["Guitar"])
        self.assertEqual(second.bio, "Hi")

        stored = await self.service.get_profile(self.db, self.user)
        self.assertEqual(stored.teach_skills, ["Python"])
        self.assertEqual(await self.service.profile_repo.count(self.db, user_id=self.user.id), 1)

    async def test_invalid_profile_lists_every_error(self):
        data = ProfileUpdate(teach_skills=["A", "B", "C", "D"], learn_skills=["E", "F", "G", "H"])

        with self.assertRaises(ProfileValidationException) as ctx:
            await self.service.save_profile(self.db, self.user, data)

        self.assertEqual(len(ctx.exception.details), 2)
        self.assertIsNone(await self.service.get_profile(self.db, self.user))

    async def test_discover_hides_self_and_private_profiles(self):
        other = await self.create_user("ben@example.com", "Ben")
        hidden = await self.create_user("cy@example.com", "Cy")
        await self.service.save_profile(self.db, self.user, ProfileUpdate(teach_skills=["Python"]))
        await self.service.save_profile(self.db, other, ProfileUpdate(teach_skills=["Guitar"]))
        await self.service.save_profile(
            self.db, hidden, ProfileUpdate(teach_skills=["Guitar"], is_public=False)
        )

        found = await self.service.discover(self.db, self.user, DiscoverFilters())

        self.assertEqual([p.user.name for p in found], ["Ben"])


class TestMatchService(DatabaseTestCase):

    async def test_ranked_matches(self):
        profiles = ProfileService()
        me = await self.create_user("me@example.com", "Me")
        two_way = await self.create_user("two@example.com", "Two")
        one_way = await self.create_user("one@example.com", "One")
        no_match = await self.create_user("none@example.com", "None")

        await profiles.save_profile(self.db, me, ProfileUpdate(teach_skills=["Python"], learn_skills=["Guitar"]))
        await profiles.save_profile(self.db, two_way, ProfileUpdate(teach_skills=["Guitar"], learn_skills=["Python"]))
        await profiles.save_profile(self.db, one_way, ProfileUpdate(learn_skills=["Python"]))
        await profiles.save_profile(self.db, no_match, ProfileUpdate(teach_skills=["Cooking"]))

        result = await MatchService().find_matches(self.db, me)

        self.assertEqual(result.total, 2)
        self.assertEqual([m.user.name for m in result.items], ["Two", "One"])
        self.assertEqual([m.match_score for m in result.items], [25, 10])
        self.assertTrue(result.items[0].is_bidirectional)

    async def test_no_profile_no_matches(self):
        me = await self.create_user("me@example.com")
        result = await MatchService().find_matches(self.db, me)
        self.assertEqual(result.items, [])


class TestRequestAndSessionFlow(DatabaseTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.requests = RequestService()
        self.sessions = SessionService()
        self.learner = await self.create_user("learner@example.com", "Learner")
        self.teacher = await self.create_user("teacher@example.com", "Teacher")

    async def send(self, skill="Guitar"):
        return await self.requests.send_request(
            self.db,
            self.learner,
            PairRequestCreate(requested_id=self.teacher.id, skill=skill, message="hi"),
        )

    async def test_send_and_list(self):
        sent = await self.send()

        self.assertEqual(sent.status, "pending")
        self.assertEqual(sent.counterpart.name, "Teacher")

        received = await self.requests.list_received(self.db, self.teacher)
        self.assertEqual([r.id for r in received], [sent.id])
        self.assertEqual(received[0].counterpart.name, "Learner")
        self.assertTrue(
            await self.requests.has_existing_request(self.db, self.learner, self.teacher.id, "Guitar")
        )

    async def test_duplicate_pending_rejected(self):
        await self.send()
        with self.assertRaises(DuplicateRequestException):
            await self.send()

    async def test_padded_skill_is_stored_and_found_trimmed(self):
        sent = await self.send(" Guitar ")

        self.assertEqual(sent.skill, "Guitar")
        self.assertTrue(
            await self.requests.has_existing_request(self.db, self.learner, self.teacher.id, " Guitar ")
        )
        with self.assertRaises(DuplicateRequestException):
            await self.send("Guitar")

    async def test_self_request_rejected(self):
        with self.assertRaises(BadRequestException):
            await self.requests.send_request(
                self.db,
                self.learner,
                PairRequestCreate(requested_id=self.learner.id, skill="Guitar"),
            )

    async def test_resend_allowed_after_cancel(self):
        sent = await self.send()
        await self.requests.cancel(self.db, self.learner, sent.id)

        again = await self.send()

        self.assertNotEqual(again.id, sent.id)

    async def test_accept_then_schedule(self):
        sent = await self.send()

        with self.assertRaises(ForbiddenException):
            await self.requests.accept(self.db, self.learner, sent.id)

        accepted = await self.requests.accept(self.db, self.teacher, sent.id)
        self.assertEqual(accepted.request.status, "accepted")
        self.assertEqual(accepted.next_action, "schedule_session")

        with self.assertRaises(InvalidTransitionException):
            await self.requests.decline(self.db, self.teacher, sent.id)

        when = datetime.now(timezone.utc) + timedelta(days=1)
        session = await self.sessions.create_session(
            self.db,
            self.teacher,
            SessionCreate(pair_request_id=sent.id, scheduled_date=when, duration_minutes=45),
        )
        self.assertEqual(session.teacher_id, self.teacher.id)
        self.assertEqual(session.learner_id, self.learner.id)
        self.assertEqual(session.skill, "Guitar")
        self.assertEqual(session.status, "scheduled")

        with self.assertRaises(ConflictException):
            await self.sessions.create_session(
                self.db, self.teacher, SessionCreate(pair_request_id=sent.id)
            )

        calendar = await self.sessions.calendar(self.db, self.learner)
        self.assertEqual([s.id for s in calendar.upcoming], [session.id])
        self.assertEqual(calendar.past, [])

        later = await self.sessions.calendar(self.db, self.learner, now=when + timedelta(hours=2))
        self.assertEqual([s.id for s in later.past], [session.id])

    async def test_pending_request_cannot_be_scheduled(self):
        sent = await self.send()
        with self.assertRaises(ConflictException):
            await self.sessions.create_session(
                self.db, self.teacher, SessionCreate(pair_request_id=sent.id)
            )

    async def test_update_and_close_session(self):
        sent = await self.send()
        await self.requests.accept(self.db, self.teacher, sent.id)
        session = await self.sessions.create_session(
            self.db, self.teacher, SessionCreate(pair_request_id=sent.id)
        )

        updated = await self.sessions.update_session(
            self.db, self.learner, session.id, SessionUpdate(meeting_link="https://meet.example.com/x")
        )
        self.assertEqual(updated.meeting_link, "https://meet.example.com/x")
        self.assertEqual(updated.status, "scheduled")

        cleared = await self.sessions.update_session(
            self.db, self.learner, session.id, SessionUpdate(meeting_link="", notes="")
        )
        self.assertIsNone(cleared.meeting_link)
        self.assertIsNone(cleared.notes)

        outsider = await self.create_user("outsider@example.com")
        with self.assertRaises(SessionNotFoundException):
            await self.sessions.complete_session(self.db, outsider, session.id)

        done = await self.sessions.complete_session(self.db, self.learner, session.id)
        self.assertEqual(done.status, "completed")

        with self.assertRaises(InvalidTransitionException):
            await self.sessions.cancel_session(self.db, self.teacher, session.id)


class TestAnalyticsService(DatabaseTestCase):

    async def test_rebuild_and_read(self):
        profiles = ProfileService()
        requests = RequestService()
        alice = await self.create_user("alice@example.com", "Alice")
        bob = await self.create_user("bob@example.com", "Bob")
        await profiles.save_profile(self.db, alice, ProfileUpdate(teach_skills=["Python"], learn_skills=["Guitar"]))
        await profiles.save_profile(self.db, bob, ProfileUpdate(teach_skills=["Guitar"], learn_skills=["Python"]))

        sent = await requests.send_request(
            self.db, alice, PairRequestCreate(requested_id=bob.id, skill="Guitar")
        )
        await requests.accept(self.db, bob, sent.id)

        service = AnalyticsService()
        self.assertIsNone(await service.user_stats(self.db, alice))

        result = await service.rebuild(self.db)
        self.assertEqual(result.skills, 2)
        self.assertEqual(result.users, 2)

        skills = await service.list_skill_analytics(self.db)
        self.assertEqual(skills[0].skill_name, "Guitar")
        self.assertEqual(skills[0].total_requests, 1)
        self.assertEqual(skills[0].success_rate, 100)

        stats = await service.user_stats(self.db, alice)
        self.assertEqual(stats.sent_requests, 1)
        self.assertEqual(stats.accepted_requests, 1)
        self.assertEqual(stats.total_skills, 2)

        # Rebuilding again replaces rather than adds
        await service.rebuild(self.db)
        self.assertEqual(len(await service.list_skill_analytics(self.db)), 2)


if __name__ == "__main__":
    unittest.main()
