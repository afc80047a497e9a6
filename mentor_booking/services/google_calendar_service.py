"""
Google Calendar Service
Creates calendar events with an auto-generated Google Meet link
"""
import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional

import httpx

from ..config import GOOGLE_CALENDAR_ID, GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET, GOOGLE_REFRESH_TOKEN
from .base import MeetingSchedulerError

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_CALENDAR_API = "https://www.googleapis.com/calendar/v3"


class GoogleMeetScheduler:
    """Meeting scheduler that inserts events into a single Google Calendar"""

    def __init__(
        self,
        client_id: Optional[str] = GOOGLE_CLIENT_ID,
        client_secret: Optional[str] = GOOGLE_CLIENT_SECRET,
        refresh_token: Optional[str] = GOOGLE_REFRESH_TOKEN,
        calendar_id: str = GOOGLE_CALENDAR_ID,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_token = refresh_token
        self.calendar_id = calendar_id
        self._transport = transport
        self._access_token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=30.0, transport=self._transport)

    async def get_valid_access_token(self) -> str:
        """
        Get a valid access token, refreshing if necessary
        Raises MeetingSchedulerError if the refresh fails
        """
        # Reuse the cached token unless it expires within 5 minutes
        if (
            self._access_token
            and self._token_expires_at
            and self._token_expires_at > datetime.utcnow() + timedelta(minutes=5)
        ):
            return self._access_token

        if not (self.client_id and self.client_secret and self.refresh_token):
            raise MeetingSchedulerError("Google Calendar credentials not configured")

        logger.info("🔄 Google Calendar token expired, refreshing...")
        async with self._client() as client:
            try:
                response = await client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "refresh_token": self.refresh_token,
                        "grant_type": "refresh_token",
                    },
                )
            except httpx.HTTPError as e:
                raise MeetingSchedulerError(f"Token refresh request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"❌ Token refresh failed: {response.text}")
            raise MeetingSchedulerError(f"Token refresh failed with HTTP {response.status_code}")

        tokens = response.json()
        access_token = tokens.get("access_token")
        if not access_token:
            raise MeetingSchedulerError("No access token in refresh response")

        self._access_token = access_token
        self._token_expires_at = datetime.utcnow() + timedelta(seconds=tokens.get("expires_in", 3600))
        logger.info("✅ Google Calendar token refreshed successfully")
        return access_token

    async def create_meeting(
        self,
        start: datetime,
        duration_minutes: int,
        summary: str,
        attendees: list[str],
    ) -> str:
        """
        Create a Google Calendar event with a Meet conference attached.
        start is naive UTC. Returns the event's hangoutLink.
        """
        end = start + timedelta(minutes=duration_minutes)
        event_data = {
            "summary": summary,
            "start": {"dateTime": start.isoformat(), "timeZone": "UTC"},
            "end": {"dateTime": end.isoformat(), "timeZone": "UTC"},
            "conferenceData": {
                "createRequest": {
                    "requestId": f"meet-{uuid.uuid4().hex}",
                    "conferenceSolutionKey": {"type": "hangoutsMeet"},
                }
            },
            "attendees": [{"email": email} for email in attendees if email],
        }

        access_token = await self.get_valid_access_token()

        async with self._client() as client:
            try:
                response = await client.post(
                    f"{GOOGLE_CALENDAR_API}/calendars/{self.calendar_id}/events",
                    params={"conferenceDataVersion": 1, "sendUpdates": "all"},
                    headers={"Authorization": f"Bearer {access_token}"},
                    json=event_data,
                )
            except httpx.HTTPError as e:
                raise MeetingSchedulerError(f"Calendar request failed: {e}") from e

        if response.status_code not in [200, 201]:
            logger.error(f"❌ Failed to create calendar event: {response.text}")
            raise MeetingSchedulerError(f"Calendar event creation failed with HTTP {response.status_code}")

        event = response.json()
        link = event.get("hangoutLink")
        if not link:
            raise MeetingSchedulerError(f"Calendar event {event.get('id')} has no meeting link")

        logger.info(f"✅ Google Calendar event created: {event.get('id')}")
        return link
