"""Shared fixtures: credentials and a DingTalk client on a mock transport."""

import httpx
import pytest

from dingtalk_robot.core.credentials import Credentials
from dingtalk_robot.dingtalk.client import DingTalkClient


@pytest.fixture
def credentials():
    return Credentials(access_token="abc", sec_token="s3cr3t")


@pytest.fixture
def unsigned_credentials():
    return Credentials(access_token="abc")


@pytest.fixture
def sent_requests():
    """Requests captured by the mock transport, in send order."""
    return []


@pytest.fixture
def make_client(sent_requests):
    """Build a DingTalkClient whose HTTP calls hit an in-memory handler.

    ``status`` is the status code returned; ``error`` is raised instead when set.
    """

    def _make(credentials=None, status=200, error=None):
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if error is not None:
                raise error
            return httpx.Response(status, json={"errcode": 0, "errmsg": "ok"})

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return DingTalkClient(credentials=credentials or Credentials(access_token="abc"), http=http)

    return _make
