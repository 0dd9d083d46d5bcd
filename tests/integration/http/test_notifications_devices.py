from __future__ import annotations

from src.application.notifications.types import NotificationType
from src.domain.models.notification import Notification
from src.infrastructure.repos.notifications_sqlalchemy import NotificationsSQLAlchemyRepository


async def seed_notification(app, seeded_users, user_key: str) -> Notification:
    async with app.state.session_factory() as session:
        repo = NotificationsSQLAlchemyRepository(session)
        saved = await repo.add(
            Notification.create(
                organization_id=seeded_users["farm_id"],
                user_id=seeded_users[user_key],
                type=NotificationType.PREGNANCY_CHECK_DUE,
                title="Pregnancy Check Due",
                message="Pregnancy check is due for Daisy (C-001)",
                data={"check_date": "2024-01-16"},
            )
        )
        await session.commit()
    return saved


async def test_mark_notification_as_read(app, client, seeded_users):
    notification = await seed_notification(app, seeded_users, "worker")

    listing = await client.get("/api/v1/notifications", headers=seeded_users["worker_headers"])
    assert listing.status_code == 200
    body = listing.json()
    assert body["unread_count"] == 1
    assert body["notifications"][0]["data"] == {"check_date": "2024-01-16"}

    not_owner = await client.put(
        f"/api/v1/notifications/{notification.id}/read", headers=seeded_users["admin_headers"]
    )
    assert not_owner.status_code == 404

    marked = await client.put(
        f"/api/v1/notifications/{notification.id}/read", headers=seeded_users["worker_headers"]
    )
    assert marked.status_code == 200
    assert marked.json() == {"marked_count": 1}

    again = await client.put(
        f"/api/v1/notifications/{notification.id}/read", headers=seeded_users["worker_headers"]
    )
    assert again.json() == {"marked_count": 0}

    unread = await client.get(
        "/api/v1/notifications",
        params={"unread_only": True},
        headers=seeded_users["worker_headers"],
    )
    assert unread.json()["notifications"] == []
    assert unread.json()["unread_count"] == 0


async def test_device_token_register_and_remove(client, seeded_users):
    headers = seeded_users["worker_headers"]
    payload = {"platform": "ios", "token": "ios-device-token-1", "app_version": "1.2.0"}

    first = await client.post("/api/v1/devices/tokens", json=payload, headers=headers)
    assert first.json() == {"status": "ok"}
    # Re-registering the same device is not an error
    second = await client.post("/api/v1/devices/tokens", json=payload, headers=headers)
    assert second.status_code == 200

    removed = await client.request(
        "DELETE", "/api/v1/devices/tokens", json={"token": payload["token"]}, headers=headers
    )
    assert removed.json() == {"status": "ok"}
    missing = await client.request(
        "DELETE", "/api/v1/devices/tokens", json={"token": payload["token"]}, headers=headers
    )
    assert missing.json() == {"status": "not_found"}
