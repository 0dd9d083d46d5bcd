from __future__ import annotations

from src.config.settings import Settings, get_settings
from src.infrastructure.push.fcm import FCMClient
from src.infrastructure.push.fcm_v1 import FCMv1Client


def build_push_sender(settings: Settings | None = None) -> FCMClient | FCMv1Client | None:
    """Prefer HTTP v1 when a service account is configured, else the legacy server key."""
    settings = settings or get_settings()
    sa_json = settings.get_fcm_service_account_json()
    if settings.fcm_project_id and sa_json:
        return FCMv1Client(project_id=settings.fcm_project_id, service_account_json=sa_json)
    if settings.fcm_server_key:
        return FCMClient(settings.fcm_server_key.get_secret_value())
    return None
