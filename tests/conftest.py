import json
import logging

import pytest
import requests
from requests.structures import CaseInsensitiveDict

import config
from api_client import MolgenisClient


class FakeSession(requests.Session):
    """requests.Session that records prepared requests and replays canned responses."""

    def __init__(self, responses=None):
        super().__init__()
        self.trust_env = False
        self.responses = list(responses or [])
        self.sent = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        response.url = request.url
        response.request = request
        return response

    @property
    def last(self):
        return self.sent[-1]


def make_response(status=200, body=None, content_type=None, reason=None, headers=None):
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.headers = CaseInsensitiveDict()
    if content_type is not None:
        response.headers["Content-Type"] = content_type
    response.headers.update(headers or {})
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")
    response._content = content
    response._content_consumed = True
    response.encoding = "utf-8"
    return response


@pytest.fixture
def response():
    return make_response


@pytest.fixture
def client_with():
    """Build a MolgenisClient whose session replays the given responses."""
    def build(*responses, **kwargs):
        return MolgenisClient(session=FakeSession(responses), **kwargs)

    return build


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(config.LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
