from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from mentorconnect.core.database import utc_now
from mentorconnect.core.database.entities import ConnectionStatus, MentorReview, Notification, UserRole

pytestmark = pytest.mark.asyncio


class TestRequest:
    async def test_request_creates_pending_connection(
        self, client: AsyncClient, session, hub, mentor, mentee, auth_headers
    ):
        async with hub.subscribe(f"user-{mentor.id}") as events:
            response = await client.post(
                "/api/v1/connections/request", json={"mentor_id": mentor.id}, headers=auth_headers(mentee)
            )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["mentee"]["name"] == mentee.name

        notification = (await session.exec(select(Notification))).one()
        assert notification.user_id == mentor.id
        assert notification.title == "Connection Request"
        event = events.get_nowait()
        assert event["event"] == "connection-request"
        assert event["data"]["id"] == data["id"]
        assert events.empty()

    async def test_request_to_non_mentor(self, client: AsyncClient, make_user, mentee, auth_headers):
        other_mentee = await make_user(role=UserRole.MENTEE)
        response = await client.post(
            "/api/v1/connections/request", json={"mentor_id": other_mentee.id}, headers=auth_headers(mentee)
        )
        assert response.status_code == 404

    @pytest.mark.parametrize("status", [ConnectionStatus.PENDING, ConnectionStatus.ACCEPTED])
    async def test_duplicate_request(self, client: AsyncClient, make_connection, mentor, mentee, auth_headers, status):
        await make_connection(mentor, mentee, status)
        response = await client.post(
            "/api/v1/connections/request", json={"mentor_id": mentor.id}, headers=auth_headers(mentee)
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Connection request already exists"

    @pytest.mark.parametrize("status", [ConnectionStatus.REJECTED, ConnectionStatus.REMOVED])
    async def test_closed_connection_is_reopened(
        self, client: AsyncClient, make_connection, mentor, mentee, auth_headers, status
    ):
        connection = await make_connection(mentor, mentee, status)
        response = await client.post(
            "/api/v1/connections/request", json={"mentor_id": mentor.id}, headers=auth_headers(mentee)
        )
        assert response.status_code == 200
        assert response.json()["id"] == connection.id
        assert response.json()["status"] == "PENDING"


class TestRespond:
    async def test_accept_notifies_mentee(
        self, client: AsyncClient, hub, make_connection, mentor, mentee, auth_headers
    ):
        connection = await make_connection(mentor, mentee, ConnectionStatus.PENDING)

        async with hub.subscribe(f"user-{mentee.id}") as events:
            response = await client.post(
                "/api/v1/connections/respond",
                json={"request_id": connection.id, "action": "accept"},
                headers=auth_headers(mentor),
            )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ACCEPTED"
        assert data["other_user"]["id"] == mentee.id
        event = events.get_nowait()
        assert event["event"] == "connection-response"
        assert event["data"]["action"] == "accept"
        assert event["data"]["message"] == f"{mentor.name} has accepted your connection request."

    async def test_reject(self, client: AsyncClient, make_connection, mentor, mentee, auth_headers):
        connection = await make_connection(mentor, mentee, ConnectionStatus.PENDING)
        response = await client.post(
            "/api/v1/connections/respond",
            json={"request_id": connection.id, "action": "reject"},
            headers=auth_headers(mentor),
        )
        assert response.json()["status"] == "REJECTED"

    async def test_respond_errors(self, client: AsyncClient, make_connection, mentor, mentee, auth_headers):
        connection = await make_connection(mentor, mentee, ConnectionStatus.PENDING)

        invalid = await client.post(
            "/api/v1/connections/respond",
            json={"request_id": connection.id, "action": "maybe"},
            headers=auth_headers(mentor),
        )
        missing = await client.post(
            "/api/v1/connections/respond", json={"request_id": "missing", "action": "accept"}, headers=auth_headers(mentor)
        )
        not_addressee = await client.post(
            "/api/v1/connections/respond",
            json={"request_id": connection.id, "action": "accept"},
            headers=auth_headers(mentee),
        )

        assert invalid.status_code == 400
        assert missing.status_code == 404
        assert not_addressee.status_code == 401

    async def test_respond_to_settled_request(self, client: AsyncClient, make_connection, mentor, mentee, auth_headers):
        connection = await make_connection(mentor, mentee, ConnectionStatus.ACCEPTED)
        response = await client.post(
            "/api/v1/connections/respond",
            json={"request_id": connection.id, "action": "reject"},
            headers=auth_headers(mentor),
        )
        assert response.status_code == 409


class TestRemove:
    async def test_remove_notifies_other_party(
        self, client: AsyncClient, session, make_connection, mentor, mentee, auth_headers
    ):
        connection = await make_connection(mentor, mentee)

        response = await client.post(
            "/api/v1/connections/remove", json={"connection_id": connection.id}, headers=auth_headers(mentee)
        )

        assert response.status_code == 200
        assert response.json()["status"] == "REMOVED"
        notification = (await session.exec(select(Notification))).one()
        assert notification.user_id == mentor.id
        assert notification.title == "Connection Removed"

    async def test_remove_errors(self, client: AsyncClient, make_user, make_connection, mentor, mentee, auth_headers):
        connection = await make_connection(mentor, mentee)
        outsider = await make_user()

        missing_id = await client.post("/api/v1/connections/remove", json={}, headers=auth_headers(mentee))
        missing = await client.post(
            "/api/v1/connections/remove", json={"connection_id": "missing"}, headers=auth_headers(mentee)
        )
        foreign = await client.post(
            "/api/v1/connections/remove", json={"connection_id": connection.id}, headers=auth_headers(outsider)
        )

        assert missing_id.status_code == 400
        assert missing.status_code == 404
        assert foreign.status_code == 401


class TestListings:
    async def test_list_returns_accepted_connections_for_both_roles(
        self, client: AsyncClient, make_user, make_connection, mentor, mentee, auth_headers
    ):
        pending_mentee = await make_user(name="Pending Mentee")
        await make_connection(mentor, mentee)
        await make_connection(mentor, pending_mentee, ConnectionStatus.PENDING)

        as_mentor = await client.get("/api/v1/connections/list", headers=auth_headers(mentor))
        as_mentee = await client.get("/api/v1/connections/list", headers=auth_headers(mentee))

        assert [c["other_user"]["id"] for c in as_mentor.json()] == [mentee.id]
        assert [c["other_user"]["id"] for c in as_mentee.json()] == [mentor.id]

    async def test_pending_lists_requests_for_mentor(
        self, client: AsyncClient, make_user, make_connection, mentor, mentee, auth_headers
    ):
        accepted_mentee = await make_user(name="Accepted Mentee")
        await make_connection(mentor, mentee, ConnectionStatus.PENDING)
        await make_connection(mentor, accepted_mentee)

        response = await client.get("/api/v1/connections/pending", headers=auth_headers(mentor))

        assert [c["mentee"]["name"] for c in response.json()] == [mentee.name]

    async def test_reopened_request_is_listed_as_newest(
        self, client: AsyncClient, session, make_user, make_connection, mentor, mentee, auth_headers
    ):
        other_mentee = await make_user(name="Waiting Mentee")
        closed = await make_connection(mentor, mentee, ConnectionStatus.REJECTED)
        waiting = await make_connection(mentor, other_mentee, ConnectionStatus.PENDING)
        closed.created_at = utc_now() - timedelta(days=2)
        waiting.created_at = utc_now() - timedelta(days=1)
        session.add_all([closed, waiting])
        await session.commit()

        reopened = await client.post(
            "/api/v1/connections/request", json={"mentor_id": mentor.id}, headers=auth_headers(mentee)
        )
        response = await client.get("/api/v1/connections/pending", headers=auth_headers(mentor))

        assert reopened.status_code == 200
        assert [c["mentee"]["name"] for c in response.json()] == [mentee.name, other_mentee.name]

    async def test_mentee_view_includes_mentor_profile_summary(
        self, client: AsyncClient, session, make_user, make_connection, mentor, mentee, mentor_profile, auth_headers
    ):
        no_profile_mentor = await make_user(name="New Mentor", role=UserRole.MENTOR)
        await make_connection(mentor, mentee)
        await make_connection(no_profile_mentor, mentee, ConnectionStatus.REJECTED)
        session.add(MentorReview(mentor_profile_id=mentor_profile.id, author_id=mentee.id, rating=4))
        await session.commit()

        response = await client.get("/api/v1/connections/mentee", headers=auth_headers(mentee))

        by_mentor = {c["mentor"]["id"]: c for c in response.json()}
        assert by_mentor[mentor.id]["mentor_profile"] == {
            "title": mentor_profile.title,
            "expertise": mentor_profile.expertise,
            "rating": 4.0,
        }
        assert by_mentor[no_profile_mentor.id]["status"] == "REJECTED"
        assert by_mentor[no_profile_mentor.id]["mentor_profile"] is None
