"""Pytest configuration - loads .env for live tests and provides a fake transport."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from mailchimp_sdk.sdk import MailchimpClient

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


Responder = Callable[..., bytes]


class FakeProvider:
    """
    Records every call and answers from canned responses.

    A response is either bytes, an exception instance (raised), or a
    callable receiving the same arguments as the verb.
    """

    def __init__(self) -> None:
        self.responses: dict[str, Any] = {"GET": b"{}", "POST": b"{}", "PATCH": b"{}", "DELETE": b""}
        self.calls: list[tuple[str, str, Any]] = []

    def calls_for(self, method: str) -> list[tuple[str, str, Any]]:
        return [call for call in self.calls if call[0] == method]

    def _answer(self, method: str, path: str, *args: Any) -> bytes:
        self.calls.append((method, path, args[0] if args else None))
        response = self.responses[method]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(path, *args)
        return response

    def get(self, path: str) -> bytes:
        return self._answer("GET", path)

    def post(self, path: str, body: Any) -> bytes:
        return self._answer("POST", path, body)

    def patch(self, path: str, body: Any) -> bytes:
        return self._answer("PATCH", path, body)

    def delete(self, path: str) -> bytes:
        return self._answer("DELETE", path)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(provider: FakeProvider) -> MailchimpClient:
    return MailchimpClient(provider=provider)
