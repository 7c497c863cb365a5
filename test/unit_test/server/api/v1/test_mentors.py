from datetime import timedelta

import pytest
from httpx import AsyncClient

from mentorconnect.core.database import utc_now
from mentorconnect.core.database.entities import Availability, MentorReview, UserRole
from mentorconnect.server.api.v1.mentors import avatar_url, shares_any, split_csv

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def catalog(make_user, make_mentor_profile):
    """Three mentors with different languages, skills and rates, plus a mentee."""
    alice = await make_user(name="Alice Smith", role=UserRole.MENTOR)
    bob = await make_user(name="Bob Jones", role=UserRole.MENTOR)
    carol = await make_user(name="Carol Smithers", role=UserRole.MENTOR, onboarding_completed=False)
    await make_user(name="Smith the Mentee", role=UserRole.MENTEE)
    profiles = {
        "alice": await make_mentor_profile(alice, hourly_rate=30, languages=["English"], skills=["Python"], rating=4.0),
        "bob": await make_mentor_profile(bob, hourly_rate=60, languages=["Spanish"], skills=["Go", "Rust"], rating=5.0),
        "carol": await make_mentor_profile(carol, hourly_rate=100, languages=["English", "French"], skills=["Go"]),
    }
    return {"alice": alice, "bob": bob, "carol": carol}, profiles


class TestHelpers:
    def test_split_csv(self):
        assert split_csv(" Python, go ,,") == {"python", "go"}
        assert split_csv(None) == set()

    def test_shares_any_ignores_case(self):
        assert shares_any({"python"}, ["Python", "SQL"])
        assert not shares_any({"rust"}, ["Python"])

    def test_avatar_url_encodes_name(self):
        assert avatar_url("Ada Lovelace") == "https://ui-avatars.com/api/?name=Ada+Lovelace"


class TestSearch:
    async def test_search_is_public_and_returns_only_mentors(self, client: AsyncClient, catalog):
        response = await client.get("/api/v1/mentors")

        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Alice Smith", "Bob Jones", "Carol Smithers"]

    async def test_search_by_name_substring_ignores_case(self, client: AsyncClient, catalog):
        response = await client.get("/api/v1/mentors", params={"search": "smith"})
        assert [item["name"] for item in response.json()] == ["Alice Smith", "Carol Smithers"]

    @pytest.mark.parametrize("search", ["_", "%"])
    async def test_search_wildcards_match_only_literally(self, client: AsyncClient, catalog, search):
        response = await client.get("/api/v1/mentors", params={"search": search})

        assert response.status_code == 200
        assert response.json() == []

    async def test_price_bounds_are_inclusive(self, client: AsyncClient, catalog):
        response = await client.get("/api/v1/mentors", params={"min_price": 30, "max_price": 60})
        assert [item["name"] for item in response.json()] == ["Alice Smith", "Bob Jones"]

    async def test_languages_and_skills_match_any(self, client: AsyncClient, catalog):
        by_language = await client.get("/api/v1/mentors", params={"languages": "french,spanish"})
        by_skill = await client.get("/api/v1/mentors", params={"skills": "go"})
        combined = await client.get("/api/v1/mentors", params={"languages": "english", "skills": "go"})

        assert [item["name"] for item in by_language.json()] == ["Bob Jones", "Carol Smithers"]
        assert [item["name"] for item in by_skill.json()] == ["Bob Jones", "Carol Smithers"]
        assert [item["name"] for item in combined.json()] == ["Carol Smithers"]

    async def test_rating_is_computed_from_reviews(self, client: AsyncClient, session, catalog, make_user):
        users, profiles = catalog
        author = await make_user(name="Reviewer")
        session.add_all(
            [
                MentorReview(mentor_profile_id=profiles["alice"].id, author_id=author.id, rating=5),
                MentorReview(mentor_profile_id=profiles["alice"].id, author_id=author.id, rating=2),
            ]
        )
        await session.commit()

        response = await client.get("/api/v1/mentors", params={"search": "alice"})

        item = response.json()[0]
        assert item["rating"] == 3.5
        assert item["total_reviews"] == 2


class TestDashboardLists:
    async def test_list_requires_auth(self, client: AsyncClient):
        assert (await client.get("/api/v1/mentors/list")).status_code == 401
        assert (await client.get("/api/v1/mentors/top")).status_code == 401

    async def test_list_only_includes_onboarded_mentors(self, client: AsyncClient, catalog, mentee, auth_headers):
        response = await client.get("/api/v1/mentors/list", headers=auth_headers(mentee))

        assert response.status_code == 200
        names = {item["user"]["name"] for item in response.json()}
        assert names == {"Alice Smith", "Bob Jones"}

    async def test_top_orders_by_cached_rating(self, client: AsyncClient, catalog, mentee, auth_headers):
        response = await client.get("/api/v1/mentors/top", headers=auth_headers(mentee))

        assert [item["user"]["name"] for item in response.json()] == ["Bob Jones", "Alice Smith"]


class TestDetail:
    async def test_detail_includes_availability_and_reviews(
        self, client: AsyncClient, session, catalog, make_user
    ):
        users, profiles = catalog
        named = await make_user(name="Jane Doe", image="https://img.example.com/jane.png")
        anonymous = await make_user(name=None)
        now = utc_now()
        session.add_all(
            [
                Availability(mentor_profile_id=profiles["bob"].id, day="Wednesday", slots=[{"start": "09:00", "end": "10:00"}]),
                Availability(mentor_profile_id=profiles["bob"].id, day="Monday", slots=[{"start": "13:00", "end": "14:00"}]),
                MentorReview(
                    mentor_profile_id=profiles["bob"].id,
                    author_id=named.id,
                    rating=5,
                    comment="Great",
                    created_at=now - timedelta(days=2),
                ),
                MentorReview(mentor_profile_id=profiles["bob"].id, author_id=anonymous.id, rating=3, created_at=now),
            ]
        )
        await session.commit()

        response = await client.get(f"/api/v1/mentors/{users['bob'].id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == profiles["bob"].id
        assert [day["day"] for day in data["availability"]] == ["Monday", "Wednesday"]
        assert data["rating"] == 4
        assert data["total_reviews"] == 2
        newest, oldest = data["reviews"]
        assert newest["author"] == {"name": "Anonymous", "image": "https://ui-avatars.com/api/?name=Anonymous"}
        assert oldest["author"] == {"name": "Jane Doe", "image": "https://img.example.com/jane.png"}

    async def test_detail_of_mentee_is_404(self, client: AsyncClient, mentee):
        response = await client.get(f"/api/v1/mentors/{mentee.id}")
        assert response.status_code == 404

    async def test_detail_of_mentor_without_profile_is_404(self, client: AsyncClient, mentor):
        response = await client.get(f"/api/v1/mentors/{mentor.id}")
        assert response.status_code == 404
