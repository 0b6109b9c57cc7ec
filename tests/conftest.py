"""Pytest fixtures: a HubSpot fake on httpx.MockTransport and a stub insight model."""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app
from routers.dependencies import get_crm_client, get_insight_model
from services.hubspot_client import HubSpotClient, build_http_client

Route = Union[Tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class FakeHubSpot:
    """Answers CRM calls from a (method, path) table and records every request."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"status": "error", "message": "Unrouted in test"})
        if callable(route):
            return route(request)
        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


class FakeInsightModel:
    def __init__(self, text: str = '{"leadScore": 50, "insight": "Follow up."}', error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        hubspot_access_token="pat-test-token",
        gemini_api_key="gemini-test-key",
        hubspot_api_base="https://hubspot.test",
    )


@pytest.fixture
def hubspot() -> FakeHubSpot:
    return FakeHubSpot()


@pytest.fixture
def insight_model() -> FakeInsightModel:
    return FakeInsightModel()


@pytest.fixture
def crm_client(settings: Settings, hubspot: FakeHubSpot) -> HubSpotClient:
    return HubSpotClient(build_http_client(settings, transport=httpx.MockTransport(hubspot)))


@pytest.fixture
def client(settings: Settings, crm_client: HubSpotClient, insight_model: FakeInsightModel) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[get_crm_client] = lambda: crm_client
    app.dependency_overrides[get_insight_model] = lambda: insight_model
    return TestClient(app)
