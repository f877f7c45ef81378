#  vim:ts=4:sts=4:sw=4:et
#
#  License: Apache 2.0, see accompanying LICENSE file
#

import re
import time

from check_activemq import CheckActiveMQ, generate_token
from monscripts.utils import FetchError, FetchTimeout

ARGS = ['--host', 'broker1']


def echo(client):
    return client.broker.published[-1][1]


def test_generate_token():
    token = generate_token()
    assert token.isdigit()
    assert 10 <= len(token) <= 20


def test_round_trip_ok(run_plugin, broker):
    broker.reply = echo
    (code, output) = run_plugin(CheckActiveMQ(), ARGS)
    assert code == 0
    assert re.match(r'^OK: Test completed in \d+\.\d\d seconds\|seconds=[\d.]+;2;5$', output)
    assert broker.subscriptions == [('/topic/nagios.monitor', None)]
    (destination, _, _) = broker.published[0]
    assert destination == '/topic/nagios.monitor'


def test_critical_threshold_is_timeout(run_plugin, broker):
    broker.reply = echo
    run_plugin(CheckActiveMQ(), ARGS + ['--warning', '3', '--critical', '7', '--destination', '/queue/nagios'])
    assert broker.clients[0].timeout == 7
    assert broker.subscriptions[0][0] == '/queue/nagios'


def test_mismatch_is_critical(run_plugin, broker):
    broker.reply = lambda client: echo(client)[:-1]
    (code, output) = run_plugin(CheckActiveMQ(), ARGS)
    assert code == 2
    sent = broker.published[0][1]
    assert "sent '{0}' but received '{1}'".format(sent, sent[:-1]) in output
    assert 'possible corruption or misconfiguration' in output


def test_timeout_is_critical(run_plugin, broker):
    broker.reply = FetchTimeout('no reply received from broker broker1:61613 within 5 secs')
    (code, output) = run_plugin(CheckActiveMQ(), ARGS)
    assert code == 2
    assert re.match(r'^CRITICAL: Test took \d+\.\d\d to complete expected < 5\|seconds=', output)


def test_slow_reply_times_out_at_critical_threshold(run_plugin, broker):
    broker.reply = lambda client: time.sleep(5)
    start = time.time()
    (code, output) = run_plugin(CheckActiveMQ(), ARGS + ['-w', '1', '-c', '1'])
    assert time.time() - start < 3
    assert code == 2
    assert output.startswith('CRITICAL: Test took 1.')
    assert 'to complete expected < 1|seconds=' in output


def test_connection_failure_is_critical(run_plugin, broker):
    broker.reply = FetchError('failed to connect to broker broker1:61613: ConnectFailedException')
    (code, output) = run_plugin(CheckActiveMQ(), ARGS)
    assert code == 2
    assert 'Unexpected error during test: failed to connect to broker' in output


def test_no_timeout_switch(run_plugin, broker):
    (code, _) = run_plugin(CheckActiveMQ(), ARGS + ['--timeout', '10'])
    assert code == 3
    assert not broker.clients
