from __future__ import annotations

import json
import logging
import time
from typing import Iterable

import httpx
from jose import jwt

from src.infrastructure.push.fcm import PushDeliveryError

logger = logging.getLogger(__name__)


class FCMv1Client:
    """Firebase Cloud Messaging HTTP v1 client using a Service Account JSON.

    It generates a short-lived OAuth2 access token via JWT assertion and sends one
    request per device token (v1 has no multicast).
    """

    OAUTH_TOKEN_URL = "https://oauth2.googleapis.com/token"
    SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
    ANDROID_CHANNEL_ID = "dairy_farm_notifications"

    def __init__(self, *, project_id: str, service_account_json: str, timeout: float = 10) -> None:
        self.project_id = project_id
        self.sa = json.loads(service_account_json)
        self.timeout = timeout
        self._cached_token: str | None = None
        self._token_exp: int = 0

    async def send_to_tokens(
        self,
        *,
        tokens: Iterable[str],
        title: str,
        body: str,
        data: dict | None = None,
    ) -> list[str]:
        tokens = list(tokens)
        if not tokens:
            return []
        access_token = await self._get_access_token()
        url = f"https://fcm.googleapis.com/v1/projects/{self.project_id}/messages:send"
        headers = {"Authorization": f"Bearer {access_token}", "Content-Type": "application/json"}

        invalid: list[str] = []
        failures = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for token in tokens:
                payload = {
                    "message": {
                        "token": token,
                        "notification": {"title": title, "body": body},
                        "data": {k: str(v) for k, v in (data or {}).items() if v is not None},
                        "android": {
                            "priority": "high",
                            "notification": {
                                "sound": "default",
                                "channel_id": self.ANDROID_CHANNEL_ID,
                            },
                        },
                        "apns": {"payload": {"aps": {"sound": "default", "badge": 1}}},
                    }
                }
                resp = await client.post(url, headers=headers, json=payload)
                if resp.status_code in (400, 404) and "UNREGISTERED" in resp.text:
                    invalid.append(token)
                elif resp.status_code >= 400:
                    failures += 1
                    logger.error("FCM v1 error %s: %s", resp.status_code, resp.text)
                else:
                    logger.debug("FCM v1 sent: %s", resp.text)

        if failures == len(tokens):
            raise PushDeliveryError(f"FCM v1 rejected all {failures} messages")
        return invalid

    async def _get_access_token(self) -> str:
        now = int(time.time())
        # Reuse cached token if valid for > 60s
        if self._cached_token and now < (self._token_exp - 60):
            return self._cached_token

        exp = now + 3600
        assertion = jwt.encode(
            {
                "iss": self.sa["client_email"],
                "scope": self.SCOPE,
                "aud": self.OAUTH_TOKEN_URL,
                "iat": now,
                "exp": exp,
            },
            self.sa["private_key"],
            algorithm="RS256",
        )
        data = {
            "grant_type": "urn:ietf:params:oauth:grant-type:jwt-bearer",
            "assertion": assertion,
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(self.OAUTH_TOKEN_URL, data=data)
            resp.raise_for_status()
            token = resp.json()["access_token"]
        self._cached_token = token
        self._token_exp = exp
        return token
