"""HTTP client for the outage journal API."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx
import structlog

from outage_journal.core.config import get_settings
from outage_journal.schemas.analytics import AnalyticsResponse
from outage_journal.schemas.event_filter import FilteredEvents, FilterState
from outage_journal.schemas.outage_event import (
    OutageEvent,
    OutageEventCreate,
    OutageEventPatch,
    OutageEventReplace,
)
from outage_journal.schemas.reference import ReferenceData
from outage_journal.schemas.report import DateRangePreset, ReportBundle
from outage_journal.schemas.topology import TopologySwitchRequest, TopologySwitchResult
from outage_journal.schemas.user import LoginUser
from outage_journal.services.event_filter import active_filter_count, filter_events

logger = structlog.get_logger()

REFERENCE_KINDS = ("substations", "cells", "lines", "tps")


@dataclass(frozen=True)
class RequestContext:
    """Credentials for one caller, passed explicitly to every request."""

    token: Optional[str] = None
    user: Optional[LoginUser] = None

    def headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


class JournalClientError(Exception):
    """Non-2xx answer from the journal API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class JournalClient:
    """Client for the journal API.

    The client itself holds no credentials; each call takes the
    :class:`RequestContext` of the caller it acts for.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        settings = get_settings()
        root = base_url or f"http://localhost:{settings.PORT}"
        self.base_url = root.rstrip("/") + settings.API_V1_STR
        self.transport = transport
        self.timeout = timeout

    async def _request(
        self,
        method: str,
        path: str,
        ctx: Optional[RequestContext] = None,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        headers = ctx.headers() if ctx else {}
        async with httpx.AsyncClient(
            base_url=self.base_url, transport=self.transport, timeout=self.timeout
        ) as client:
            response = await client.request(method, path, json=json, params=params, headers=headers)

        if response.status_code >= 400:
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            logger.warning(
                "Journal API request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise JournalClientError(response.status_code, str(message))

        return response.json()

    @staticmethod
    def _body(payload) -> Dict[str, Any]:
        return payload.model_dump(mode="json", by_alias=True, exclude_unset=True)

    # Auth

    async def login(self, username: str, password: str) -> RequestContext:
        data = await self._request(
            "POST", "/auth/login", json={"username": username, "password": password}
        )
        return RequestContext(token=data["token"], user=LoginUser.model_validate(data["user"]))

    async def me(self, ctx: RequestContext) -> LoginUser:
        return LoginUser.model_validate(await self._request("GET", "/auth/me", ctx))

    # Reads

    async def reference_data(self, ctx: RequestContext) -> ReferenceData:
        return ReferenceData.model_validate(await self._request("GET", "/reference-data", ctx))

    async def events(self, ctx: RequestContext) -> List[OutageEvent]:
        data = await self._request("GET", "/events", ctx)
        return [OutageEvent.model_validate(item) for item in data]

    async def fetch_filtered(
        self,
        ctx: RequestContext,
        filters: Optional[FilterState] = None,
        now: Optional[datetime] = None,
    ) -> FilteredEvents:
        """Download the journal once and filter it locally."""
        filters = filters or FilterState()
        events = await self.events(ctx)
        return FilteredEvents(
            events=filter_events(events, filters, now=now),
            total=len(events),
            active_filter_count=active_filter_count(filters),
        )

    async def filter_events(self, ctx: RequestContext, filters: FilterState) -> FilteredEvents:
        """Let the server apply ``filters``."""
        data = await self._request("POST", "/events/filter", ctx, json=self._body(filters))
        return FilteredEvents.model_validate(data)

    async def analytics(self, ctx: RequestContext) -> AnalyticsResponse:
        return AnalyticsResponse.model_validate(await self._request("GET", "/analytics", ctx))

    async def report(self, ctx: RequestContext, preset: DateRangePreset = "month") -> ReportBundle:
        data = await self._request("GET", "/reports", ctx, params={"preset": preset})
        return ReportBundle.model_validate(data)

    # Event writes

    async def create_event(self, ctx: RequestContext, payload: OutageEventCreate) -> OutageEvent:
        data = await self._request("POST", "/events", ctx, json=self._body(payload))
        return OutageEvent.model_validate(data)

    async def replace_event(
        self, ctx: RequestContext, event_id: int, payload: OutageEventReplace
    ) -> OutageEvent:
        data = await self._request("PUT", f"/events/{event_id}", ctx, json=self._body(payload))
        return OutageEvent.model_validate(data)

    async def patch_event(
        self, ctx: RequestContext, event_id: int, payload: OutageEventPatch
    ) -> OutageEvent:
        data = await self._request("PATCH", f"/events/{event_id}", ctx, json=self._body(payload))
        return OutageEvent.model_validate(data)

    async def delete_event(self, ctx: RequestContext, event_id: int) -> None:
        await self._request("DELETE", f"/events/{event_id}", ctx)

    # Reference writes

    async def create_reference(self, ctx: RequestContext, kind: str, payload) -> Dict[str, Any]:
        if kind not in REFERENCE_KINDS:
            raise ValueError(f"Unknown reference kind: {kind}")
        return await self._request("POST", f"/{kind}", ctx, json=self._body(payload))

    async def update_reference(
        self, ctx: RequestContext, kind: str, entity_id: int, payload
    ) -> Dict[str, Any]:
        if kind not in REFERENCE_KINDS:
            raise ValueError(f"Unknown reference kind: {kind}")
        return await self._request("PUT", f"/{kind}/{entity_id}", ctx, json=self._body(payload))

    async def delete_reference(self, ctx: RequestContext, kind: str, entity_id: int) -> None:
        if kind not in REFERENCE_KINDS:
            raise ValueError(f"Unknown reference kind: {kind}")
        await self._request("DELETE", f"/{kind}/{entity_id}", ctx)

    async def switch_topology(
        self, ctx: RequestContext, request: TopologySwitchRequest
    ) -> TopologySwitchResult:
        data = await self._request("POST", "/topology/switch", ctx, json=self._body(request))
        return TopologySwitchResult.model_validate(data)
