"""
Test doubles for the upstream provider and the clock.
"""

import json

from xtreamgate.sources import UpstreamResponse


def json_response(data, status=200):
    """Build an upstream response carrying a JSON body"""
    return UpstreamResponse(status=status, body=json.dumps(data).encode())


class FakeClock:
    """Callable clock the tests move by hand"""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeUpstreamClient:
    """
    Stands in for UpstreamClient.

    API queries are answered by action name, everything else by full url.
    A registered exception is raised instead of answering.
    """

    def __init__(self):
        self.actions = {}
        self.urls = {}
        self.calls = []

    def on_action(self, action, response):
        self.actions[action] = response

    def on_url(self, url, response):
        self.urls[url] = response

    async def get(self, url, params=None):
        self.calls.append((url, params))
        if params and "action" in params:
            result = self.actions.get(params["action"])
        else:
            result = self.urls.get(url)
        if isinstance(result, Exception):
            raise result
        if result is None:
            return UpstreamResponse(status=404, body=b"not found")
        return result
