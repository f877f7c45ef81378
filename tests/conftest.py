#  vim:ts=4:sts=4:sw=4:et
#
#  License: Apache 2.0, see accompanying LICENSE file
#

import json

import pytest  # type: ignore[import]
import requests

from monscripts import StompOptions

ENV_VARS = (
    'HOST', 'PORT', 'USER', 'PASSWORD',
    'PUPPETDB_HOST', 'PUPPETDB_PORT', 'LIGHTTPD_HOST', 'LIGHTTPD_PORT',
    'STOMP_HOST', 'STOMP_PORT', 'STOMP_USER', 'STOMP_PASSWORD',
)

STATS_MAP = """
<map>
  <entry>
    <string>size</string>
    <long>{size}</long>
  </entry>
  <entry>
    <string>memoryPercentUsage</string>
    <int>{memory}</int>
  </entry>
  <entry>
    <string>destinationName</string>
    <string>queue://foo.bar</string>
  </entry>
  <entry>
    <string>averageEnqueueTime</string>
    <double>1.5</double>
  </entry>
</map>
"""


def stats_map(size=12, memory=3):
    return STATS_MAP.format(size=size, memory=memory)


@pytest.fixture(autouse=True)
def fixture_clean_environment(monkeypatch):
    """Host / port defaults must not leak in from the environment running the tests"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(name="run_plugin")
def fixture_run_plugin(capsys):
    """Runs a plugin's main() returning the exit code and the status line"""

    def run(plugin, args):
        with pytest.raises(SystemExit) as excinfo:
            plugin.main(args)
        return excinfo.value.code, capsys.readouterr().out.strip()

    return run


class FakeBroker(object):
    """Records what the scripts send and hands back a canned reply

    reply may be a string, an exception to raise or a callable taking the client
    """

    def __init__(self):
        self.reply = stats_map()
        self.clients = []
        self.subscriptions = []
        self.published = []


class FakeStompClient(object):

    def __init__(self, broker, hosts, port, user=None, password=None, timeout=2, verbosity='silent'):
        self.broker = broker
        self.hosts = hosts
        self.port = port
        self.user = user
        self.password = password
        self.timeout = timeout
        self.verbosity = verbosity
        self.disconnected = False
        broker.clients.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.disconnected = True

    def subscribe(self, destination, headers=None):
        self.broker.subscriptions.append((destination, headers))

    def publish(self, destination, body='', headers=None):
        self.broker.published.append((destination, body, headers))

    def receive(self, timeout=None):
        reply = self.broker.reply
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(self)
        return reply


@pytest.fixture(name="broker")
def fixture_broker(monkeypatch):
    broker = FakeBroker()

    def client_factory(hosts, port, **kwargs):
        return FakeStompClient(broker, hosts, port, **kwargs)

    monkeypatch.setattr(StompOptions, 'client_class', staticmethod(client_factory))
    return broker


class FakeResponse(object):

    def __init__(self, url, text='', status_code=200, reason='OK'):
        self.url = url
        self.text = text
        self.content = text.encode('utf-8')
        self.status_code = status_code
        self.reason = reason

    def json(self):
        return json.loads(self.text)


class FakeWebServer(object):
    """Stands in for requests.get, serving a canned body and recording the requests made"""

    def __init__(self):
        self.body = ''
        self.status_code = 200
        self.reason = 'OK'
        self.error = None
        self.requests = []

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return FakeResponse(url, self.body, self.status_code, self.reason)


@pytest.fixture(name="webserver")
def fixture_webserver(monkeypatch):
    server = FakeWebServer()
    monkeypatch.setattr(requests, 'get', server.get)
    return server


@pytest.fixture(name="stats_map")
def fixture_stats_map():
    """Builds a jms-map-xml statistics reply for the given queue size and memory usage"""
    return stats_map
