#  vim:ts=4:sts=4:sw=4:et
#
#  License: Apache 2.0, see accompanying LICENSE file
#

from datetime import datetime, timezone
import json
import time

import pytest  # type: ignore[import]

from check_puppetdb_nodes import CheckPuppetDBNodes, node_ages, parse_timestamp
from monscripts.utils import ParseError


def timestamp(age):
    return datetime.fromtimestamp(time.time() - age, timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ')


def node(certname, age=None, deactivated=None):
    return {
        'certname': certname,
        'deactivated': deactivated,
        'expired': None,
        'catalog_timestamp': None if age is None else timestamp(age),
        'facts_timestamp': None if age is None else timestamp(age),
        'report_timestamp': None if age is None else timestamp(age),
    }


NODES = [
    node('web1.example.com', age=60),
    node('web2.example.com', age=120),
    node('old.example.com', age=90000, deactivated='2026-10-01T10:00:00.000Z'),
    node('new.example.com'),
]


@pytest.mark.parametrize("value", [
    '2026-10-19T10:21:57.512Z',
    '2026-10-19T10:21:57Z',
    '2026-10-19T10:21:57.512+00:00',
    '2026-10-19T10:21:57.512',
])
def test_parse_timestamp(value):
    assert int(parse_timestamp(value)) == 1792405317


def test_parse_timestamp_invalid():
    with pytest.raises(ParseError, match="failed to parse catalog timestamp 'yesterday'"):
        parse_timestamp('yesterday')


def test_node_ages_skips_inactive():
    now = time.time()
    ages = node_ages(NODES, now)
    assert len(ages) == 2
    assert ages[0] <= ages[1]
    assert 59 <= ages[0] <= 61
    assert 119 <= ages[1] <= 121


@pytest.mark.parametrize("nodes", [{'error': 'not found'}, ['web1']])
def test_node_ages_bad_data(nodes):
    with pytest.raises(ParseError):
        node_ages(nodes)


def test_age_ok(run_plugin, webserver):
    webserver.body = json.dumps(NODES)
    (code, output) = run_plugin(CheckPuppetDBNodes(), ['--check-age', '--warning', '3600', '--critical', '7200'])
    assert code == 0
    assert output.startswith('OK: 2 nodes checking in sooner than 3600 seconds|oldest=')
    assert ';3600;7200 newest=' in output
    assert output.endswith(' count=2')
    (url, kwargs) = webserver.requests[0]
    assert url == 'https://puppet:8081/pdb/query/v4/nodes'
    assert kwargs['headers'] == {'Accept': 'application/json'}


@pytest.mark.parametrize("extra_node_age, expected_code, message", [
    (4000, 1, 'WARNING: 1 nodes not seen in 3600 seconds'),
    (8000, 2, 'CRITICAL: 1 nodes not seen in 7200 seconds'),
])
def test_age_breach(run_plugin, webserver, extra_node_age, expected_code, message):
    webserver.body = json.dumps(NODES + [node('stale.example.com', age=extra_node_age)])
    (code, output) = run_plugin(CheckPuppetDBNodes(), ['--age', '-w', '3600', '-c', '7200'])
    assert code == expected_code
    assert output.startswith(message)


def test_age_counts_nodes_past_warning(run_plugin, webserver):
    webserver.body = json.dumps(NODES + [node('stale1', age=4000), node('stale2', age=5000)])
    (code, output) = run_plugin(CheckPuppetDBNodes(), ['--age', '-w', '3600', '-c', '7200'])
    assert code == 1
    assert output.startswith('WARNING: 2 nodes not seen in 3600 seconds')


def test_age_no_nodes_is_critical(run_plugin, webserver):
    webserver.body = '[]'
    (code, output) = run_plugin(CheckPuppetDBNodes(), ['--check-age', '-w', '3600', '-c', '7200'])
    assert code == 2
    assert output == 'CRITICAL: Could not find any nodes|count=0'


def test_age_thresholds_must_make_sense(run_plugin, webserver):
    (code, output) = run_plugin(CheckPuppetDBNodes(), ['--check-age', '-w', '7200', '-c', '3600'])
    assert code == 3
    assert output.startswith('UNKNOWN: Parameters do not make sense')
    assert not webserver.requests


@pytest.mark.parametrize("warning, critical, expected_code, message", [
    # maximum population
    (5, 10, 0, 'OK: 2 nodes in population|'),
    (2, 10, 1, 'WARNING: 2 nodes in population but expected < 2|'),
    (1, 2, 2, 'CRITICAL: 2 nodes in population but expected < 2|'),
    # minimum population
    (2, 1, 0, 'OK: 2 nodes in population|'),
    (5, 1, 1, 'WARNING: 2 nodes in population but expected > 5|'),
    (5, 2, 2, 'CRITICAL: 2 nodes in population but expected > 2|'),
])
def test_node_count(run_plugin, webserver, warning, critical, expected_code, message):
    webserver.body = json.dumps(NODES)
    (code, output) = run_plugin(CheckPuppetDBNodes(), ['--check-nodes', '-w', str(warning), '-c', str(critical)])
    assert code == expected_code
    assert output.startswith(message)
    assert output.endswith(' count=2;{0};{1};0'.format(warning, critical))


def test_options(run_plugin, webserver):
    webserver.body = json.dumps(NODES)
    run_plugin(CheckPuppetDBNodes(), ['--nodes', '-w', '5', '-c', '10', '--host', 'puppetdb1', '--port', '8080',
                                      '--no-ssl', '--query-path', '/pdb/query/v4/nodes'])
    assert webserver.requests[0][0] == 'http://puppetdb1:8080/pdb/query/v4/nodes'


def test_host_from_environment(run_plugin, webserver, monkeypatch):
    monkeypatch.setenv('PUPPETDB_HOST', 'puppetdb2')
    webserver.body = json.dumps(NODES)
    run_plugin(CheckPuppetDBNodes(), ['--nodes', '-w', '5', '-c', '10'])
    assert webserver.requests[0][0] == 'https://puppetdb2:8081/pdb/query/v4/nodes'


@pytest.mark.parametrize("cli_args, message", [
    (['-w', '5', '-c', '10'], 'A mode like --check-age is needed'),
    (['--check-nodes', '-w', '5'], 'critical threshold not defined'),
])
def test_configuration_errors(run_plugin, webserver, cli_args, message):
    (code, output) = run_plugin(CheckPuppetDBNodes(), cli_args)
    assert code == 3
    assert message in output


def test_invalid_json(run_plugin, webserver):
    webserver.body = '<html>Service Unavailable</html>'
    (code, output) = run_plugin(CheckPuppetDBNodes(), ['--check-nodes', '-w', '5', '-c', '10'])
    assert code == 3
    assert output.startswith('UNKNOWN: invalid JSON returned by PuppetDB at https://puppet:8081/pdb/query/v4/nodes')
