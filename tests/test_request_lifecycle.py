# tests/test_request_lifecycle.py
import unittest
from types import SimpleNamespace
from uuid import uuid4

from pydantic import ValidationError

from app.core.exceptions import (
    ForbiddenException,
    InvalidTransitionException,
    PairRequestNotFoundException,
)
from app.schemas.pair_request import PairRequestCreate
from app.services.request_service import (
    authorize_transition,
    has_existing_request,
    next_status,
)


def make_request(status="pending", skill="Python", requester_id=None, requested_id=None):
    return SimpleNamespace(
        id=uuid4(),
        requester_id=requester_id or uuid4(),
        requested_id=requested_id or uuid4(),
        skill=skill,
        status=status,
    )


class TestTransitions(unittest.TestCase):

    def test_pending_reaches_every_terminal_status(self):
        for target in ("accepted", "declined", "cancelled"):
            self.assertEqual(next_status("pending", target), target)

    def test_terminal_statuses_are_final(self):
        for current in ("accepted", "declined", "cancelled"):
            for target in ("pending", "accepted", "declined", "cancelled"):
                with self.assertRaises(InvalidTransitionException):
                    next_status(current, target)

    def test_cannot_go_back_to_pending(self):
        with self.assertRaises(InvalidTransitionException) as ctx:
            next_status("pending", "pending")
        self.assertEqual(ctx.exception.status_code, 409)


class TestAuthorization(unittest.TestCase):

    def setUp(self):
        self.request = make_request()

    def test_requested_party_accepts_and_declines(self):
        authorize_transition(self.request, self.request.requested_id, "accepted")
        authorize_transition(self.request, self.request.requested_id, "declined")

    def test_requester_cannot_accept_own_request(self):
        with self.assertRaises(ForbiddenException):
            authorize_transition(self.request, self.request.requester_id, "accepted")

    def test_only_requester_cancels(self):
        authorize_transition(self.request, self.request.requester_id, "cancelled")
        with self.assertRaises(ForbiddenException):
            authorize_transition(self.request, self.request.requested_id, "cancelled")

    def test_outsider_sees_not_found(self):
        with self.assertRaises(PairRequestNotFoundException):
            authorize_transition(self.request, uuid4(), "accepted")


class TestExistingRequest(unittest.TestCase):

    def setUp(self):
        self.me = uuid4()
        self.them = uuid4()

    def test_pending_same_user_and_skill(self):
        sent = [make_request(requester_id=self.me, requested_id=self.them, skill="Python")]
        self.assertTrue(has_existing_request(sent, self.them, "Python"))

    def test_other_skill_or_user_does_not_count(self):
        sent = [make_request(requester_id=self.me, requested_id=self.them, skill="Python")]
        self.assertFalse(has_existing_request(sent, self.them, "Guitar"))
        self.assertFalse(has_existing_request(sent, uuid4(), "Python"))

    def test_closed_requests_do_not_count(self):
        sent = [
            make_request(status=status, requester_id=self.me, requested_id=self.them)
            for status in ("accepted", "declined", "cancelled")
        ]
        self.assertFalse(has_existing_request(sent, self.them, "Python"))

    def test_empty(self):
        self.assertFalse(has_existing_request([], self.them, "Python"))

    def test_padded_skill_matches_stored_name(self):
        sent = [make_request(requester_id=self.me, requested_id=self.them, skill="Python")]
        self.assertTrue(has_existing_request(sent, self.them, "  Python "))


class TestRequestPayload(unittest.TestCase):

    def test_skill_is_trimmed(self):
        data = PairRequestCreate(requested_id=uuid4(), skill=" Guitar ")
        self.assertEqual(data.skill, "Guitar")

    def test_blank_skill_rejected(self):
        for skill in ("", "   ", "\t\n"):
            with self.assertRaises(ValidationError):
                PairRequestCreate(requested_id=uuid4(), skill=skill)


if __name__ == "__main__":
    unittest.main()
