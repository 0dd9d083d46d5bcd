from __future__ import annotations

import logging
from typing import Iterable

import httpx

logger = logging.getLogger(__name__)

# Legacy API per-token errors meaning the token will never work again
_DEAD_TOKEN_ERRORS = {"NotRegistered", "InvalidRegistration", "MismatchSenderId"}


class PushDeliveryError(Exception):
    """Raised when FCM rejects the whole request (auth, quota, server error)."""


class FCMClient:
    """Minimal FCM legacy HTTP sender (server key)."""

    endpoint = "https://fcm.googleapis.com/fcm/send"

    def __init__(self, server_key: str, *, timeout: float = 10) -> None:
        self.server_key = server_key
        self.timeout = timeout

    async def send_to_tokens(
        self,
        *,
        tokens: Iterable[str],
        title: str,
        body: str,
        data: dict | None = None,
    ) -> list[str]:
        """Send one message to every token; return tokens FCM reports as dead."""
        tokens = list(tokens)
        if not tokens:
            return []
        headers = {
            "Authorization": f"key={self.server_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "registration_ids": tokens,
            "notification": {"title": title, "body": body, "sound": "default"},
            "data": data or {},
            "priority": "high",
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(self.endpoint, headers=headers, json=payload)
        if resp.status_code >= 400:
            logger.error("FCM error %s: %s", resp.status_code, resp.text)
            raise PushDeliveryError(f"FCM responded {resp.status_code}")

        results = resp.json().get("results") or []
        invalid = [
            token
            for token, result in zip(tokens, results)
            if result.get("error") in _DEAD_TOKEN_ERRORS
        ]
        logger.debug("FCM sent to %s tokens (%s invalid)", len(tokens), len(invalid))
        return invalid
