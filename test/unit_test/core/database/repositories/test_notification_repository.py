"""Unit tests for NotificationRepository."""

from datetime import datetime, timedelta

import pytest

from mentorconnect.core.database.entities import Notification, NotificationType
from mentorconnect.core.database.repositories.notifications import NotificationRepository

pytestmark = pytest.mark.asyncio


async def test_recent_and_mark_all_read(in_memory_session, add_user):
    owner = await add_user("Owner")
    other = await add_user("Other")
    repo = NotificationRepository(in_memory_session)
    base = datetime(2026, 1, 1)
    for i in range(3):
        notification = Notification(user_id=owner.id, type=NotificationType.SESSION, title=f"t{i}", message="m")
        notification.created_at = base + timedelta(hours=i)
        await repo.create(notification)
    await repo.create(Notification(user_id=other.id, type=NotificationType.SESSION, title="x", message="m"))

    recent = await repo.list_recent(owner.id, limit=2)
    assert [n.title for n in recent] == ["t2", "t1"]

    assert await repo.mark_all_read(owner.id) == 3
    assert await repo.mark_all_read(owner.id) == 0
    assert (await repo.list(filters={"user_id": other.id}))[0].read is False
