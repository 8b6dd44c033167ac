import json

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


@pytest.fixture
def fake_post(monkeypatch):
    """Replace ``requests.post``; set ``.response`` and inspect ``.calls``."""

    class _Recorder:
        def __init__(self):
            self.calls = []
            self.response = FakeResponse(payload={})

        def __call__(self, url, **kwargs):
            self.calls.append({"url": url, **kwargs})
            return self.response

    recorder = _Recorder()
    monkeypatch.setattr(requests, "post", recorder)
    return recorder
