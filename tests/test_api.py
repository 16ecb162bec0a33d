# tests/test_api.py
import unittest

from app.core.security import create_access_token, create_refresh_token
from tests.base import DatabaseTestCase

API = "/api/v1"


class ApiTestCase(DatabaseTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.http = self.client()

    async def asyncTearDown(self):
        await self.http.aclose()
        await super().asyncTearDown()

    async def register(self, email, full_name=None, password="password123"):
        response = await self.http.post(f"{API}/auth/register", json={
            "email": email,
            "password": password,
            "full_name": full_name,
        })
        self.assertEqual(response.status_code, 201, response.text)
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    async def save_profile(self, headers, teach=(), learn=()):
        response = await self.http.put(f"{API}/profiles/me", headers=headers, json={
            "teach_skills": list(teach),
            "learn_skills": list(learn),
        })
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    async def user_id(self, headers):
        response = await self.http.get(f"{API}/profiles/me", headers=headers)
        return response.json()["user_id"]


class TestAuthApi(ApiTestCase):

    async def test_register_login_refresh(self):
        await self.register("ana@example.com", "Ana")

        response = await self.http.post(f"{API}/auth/login", json={
            "email": "ana@example.com",
            "password": "password123",
        })
        self.assertEqual(response.status_code, 200)
        tokens = response.json()
        self.assertEqual(tokens["token_type"], "bearer")

        response = await self.http.post(f"{API}/auth/refresh", json={
            "refresh_token": tokens["refresh_token"],
        })
        self.assertEqual(response.status_code, 200)

    async def test_duplicate_email(self):
        await self.register("ana@example.com")
        response = await self.http.post(f"{API}/auth/register", json={
            "email": "ana@example.com",
            "password": "password123",
        })
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "EMAIL_EXISTS")

    async def test_wrong_password(self):
        await self.register("ana@example.com")
        response = await self.http.post(f"{API}/auth/login", json={
            "email": "ana@example.com",
            "password": "not-the-password",
        })
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "INVALID_CREDENTIALS")

    async def test_refresh_token_is_not_an_access_token(self):
        user = await self.create_user("ana@example.com")
        headers = {"Authorization": f"Bearer {create_refresh_token(str(user.id))}"}

        response = await self.http.get(f"{API}/profiles/me", headers=headers)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "INVALID_TOKEN")

    async def test_access_token_cannot_refresh(self):
        user = await self.create_user("ana@example.com")
        response = await self.http.post(f"{API}/auth/refresh", json={
            "refresh_token": create_access_token(str(user.id)),
        })
        self.assertEqual(response.status_code, 401)

    async def test_missing_token(self):
        response = await self.http.get(f"{API}/matches")
        self.assertEqual(response.status_code, 401)


class TestCatalogAndHealthApi(ApiTestCase):

    async def test_health(self):
        response = await self.http.get(f"{API}/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["checks"]["database"], "healthy")

    async def test_skill_catalog(self):
        skills = (await self.http.get(f"{API}/skills")).json()
        categories = (await self.http.get(f"{API}/skills/categories")).json()

        self.assertIn("Python", skills)
        self.assertIn("Guitar", categories["Music & Arts"])

    async def test_openapi_documents_error_body(self):
        schema = (await self.http.get("/openapi.json")).json()

        self.assertIn("ErrorResponse", schema["components"]["schemas"])
        responses = schema["paths"][f"{API}/requests"]["post"]["responses"]
        self.assertEqual(
            responses["409"]["content"]["application/json"]["schema"]["$ref"],
            "#/components/schemas/ErrorResponse",
        )


class TestProfileApi(ApiTestCase):

    async def test_profile_absent_then_saved(self):
        headers = await self.register("ana@example.com", "Ana")

        response = await self.http.get(f"{API}/profiles/me", headers=headers)
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json())

        profile = await self.save_profile(headers, teach=["Python"], learn=["Guitar"])
        self.assertTrue(profile["is_complete"])

    async def test_validation_errors(self):
        headers = await self.register("ana@example.com")

        response = await self.http.put(f"{API}/profiles/me", headers=headers, json={
            "teach_skills": [],
            "learn_skills": [],
        })

        self.assertEqual(response.status_code, 422)
        body = response.json()
        self.assertEqual(body["error"], "PROFILE_INVALID")
        self.assertEqual(body["details"], ["Please select at least one skill to teach or learn"])

    async def test_discover_filters(self):
        me = await self.register("me@example.com", "Me")
        maria = await self.register("maria@example.com", "Maria")
        sam = await self.register("sam@example.com", "Sam")
        await self.save_profile(me, teach=["Python"])
        await self.save_profile(maria, teach=["Spanish"])
        await self.save_profile(sam, learn=["Figma"])

        response = await self.http.get(
            f"{API}/profiles/discover", headers=me, params={"skill_type": "teach"}
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual([p["user"]["name"] for p in response.json()], ["Maria"])


class TestExchangeFlowApi(ApiTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.me = await self.register("me@example.com", "Me")
        self.them = await self.register("them@example.com", "Them")
        await self.save_profile(self.me, teach=["Python"], learn=["Guitar"])
        await self.save_profile(self.them, teach=["Guitar"], learn=["Python"])
        self.them_id = await self.user_id(self.them)

    async def test_full_exchange(self):
        # Match
        response = await self.http.get(f"{API}/matches", headers=self.me)
        matches = response.json()
        self.assertEqual(matches["total"], 1)
        self.assertEqual(matches["items"][0]["match_score"], 25)
        self.assertTrue(matches["items"][0]["is_bidirectional"])

        # Request
        response = await self.http.post(f"{API}/requests", headers=self.me, json={
            "requested_id": self.them_id,
            "skill": "Guitar",
            "message": "Teach me chords?",
        })
        self.assertEqual(response.status_code, 201, response.text)
        request_id = response.json()["id"]

        response = await self.http.get(
            f"{API}/requests/exists",
            headers=self.me,
            params={"requested_id": self.them_id, "skill": "Guitar"},
        )
        self.assertTrue(response.json()["exists"])

        response = await self.http.post(f"{API}/requests", headers=self.me, json={
            "requested_id": self.them_id,
            "skill": "Guitar",
        })
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "DUPLICATE_REQUEST")

        # Accept
        received = (await self.http.get(f"{API}/requests/received", headers=self.them)).json()
        self.assertEqual([r["id"] for r in received], [request_id])

        response = await self.http.post(f"{API}/requests/{request_id}/accept", headers=self.me)
        self.assertEqual(response.status_code, 403)

        response = await self.http.post(f"{API}/requests/{request_id}/accept", headers=self.them)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["next_action"], "schedule_session")

        response = await self.http.post(f"{API}/requests/{request_id}/cancel", headers=self.me)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "INVALID_TRANSITION")

        # Schedule
        response = await self.http.post(f"{API}/sessions", headers=self.them, json={
            "pair_request_id": request_id,
            "scheduled_date": "2099-01-01T10:00:00Z",
            "duration_minutes": 60,
        })
        self.assertEqual(response.status_code, 201, response.text)
        session = response.json()
        self.assertEqual(session["teacher"]["name"], "Them")
        self.assertEqual(session["learner"]["name"], "Me")

        calendar = (await self.http.get(f"{API}/sessions/calendar", headers=self.me)).json()
        self.assertEqual([s["id"] for s in calendar["upcoming"]], [session["id"]])

        response = await self.http.patch(
            f"{API}/sessions/{session['id']}", headers=self.me, json={"notes": "Bring a capo"}
        )
        self.assertEqual(response.json()["notes"], "Bring a capo")

        response = await self.http.post(f"{API}/sessions/{session['id']}/complete", headers=self.me)
        self.assertEqual(response.json()["status"], "completed")

        calendar = (await self.http.get(f"{API}/sessions/calendar", headers=self.me)).json()
        self.assertEqual(calendar["upcoming"], [])
        self.assertEqual([s["id"] for s in calendar["past"]], [session["id"]])

    async def test_blank_skill_is_rejected(self):
        response = await self.http.post(f"{API}/requests", headers=self.me, json={
            "requested_id": self.them_id,
            "skill": "   ",
        })
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error"], "VALIDATION_ERROR")

        sent = (await self.http.get(f"{API}/requests/sent", headers=self.me)).json()
        self.assertEqual(sent, [])

    async def test_padded_skill_is_found_by_exists(self):
        response = await self.http.post(f"{API}/requests", headers=self.me, json={
            "requested_id": self.them_id,
            "skill": " Guitar ",
        })
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["skill"], "Guitar")

        for skill in ("Guitar", " Guitar "):
            response = await self.http.get(
                f"{API}/requests/exists",
                headers=self.me,
                params={"requested_id": self.them_id, "skill": skill},
            )
            self.assertTrue(response.json()["exists"], skill)

    async def test_unknown_request_is_404(self):
        response = await self.http.post(
            f"{API}/requests/00000000-0000-0000-0000-000000000000/accept", headers=self.them
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "REQUEST_NOT_FOUND")


class TestAnalyticsApi(ApiTestCase):

    async def test_rebuild_is_admin_only(self):
        headers = await self.register("ana@example.com")
        response = await self.http.post(f"{API}/analytics/rebuild", headers=headers)
        self.assertEqual(response.status_code, 403)

    async def test_rebuild_and_read(self):
        ana = await self.register("ana@example.com")
        await self.save_profile(ana, teach=["Python"], learn=["Guitar"])
        await self.create_user("admin@example.com", is_admin=True, password="admin12345")
        response = await self.http.post(f"{API}/auth/login", json={
            "email": "admin@example.com",
            "password": "admin12345",
        })
        admin = {"Authorization": f"Bearer {response.json()['access_token']}"}

        response = await self.http.post(f"{API}/analytics/rebuild", headers=admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"skills": 2, "users": 1})

        top = (await self.http.get(
            f"{API}/analytics/skills/top", headers=ana, params={"kind": "teach", "limit": 1}
        )).json()
        self.assertEqual([s["skill_name"] for s in top], ["Python"])

        stats = (await self.http.get(f"{API}/analytics/me", headers=ana)).json()
        self.assertEqual(stats["total_skills"], 2)
        self.assertEqual(stats["success_rate"], 0)


if __name__ == "__main__":
    unittest.main()
