import json

import pytest

from content_delivery import StackConfig, stack
from content_delivery.core.request import TransportResponse
from content_delivery.transport import Transport


class RecordingTransport(Transport):
    """Answers every request with a canned response and keeps what was sent."""

    def __init__(self):
        super().__init__(max_workers=1)
        self.requests = []
        self.response = TransportResponse(200, "{}")

    def send(self, request):
        self.requests.append(request)
        return self.response

    def reply(self, status_code=200, body=None, text=None):
        if text is None:
            text = json.dumps(body)
        self.response = TransportResponse(status_code, text)

    @property
    def last_request(self):
        return self.requests[-1]


class CallbackRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, result, error):
        self.calls.append((result, error))

    @property
    def result(self):
        return self.calls[-1][0]

    @property
    def error(self):
        return self.calls[-1][1]


@pytest.fixture
def config():
    return StackConfig(_env_file=None)


@pytest.fixture
def transport():
    recording = RecordingTransport()
    yield recording
    recording.close()


@pytest.fixture
def delivery(config, transport):
    return stack("blt_api_key", "cs_delivery_token", "production", config=config, transport=transport)


@pytest.fixture
def recorder():
    return CallbackRecorder()
