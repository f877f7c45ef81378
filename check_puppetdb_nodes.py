#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 20:31:14 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Nagios Plugin to check PuppetDB for nodes which have not checked in recently or for the number of active nodes

--check-age raises WARNING / CRITICAL when the oldest catalog compiled for any active node is older than the
thresholds in seconds. The critical threshold must not be smaller than the warning threshold.

--check-nodes checks the number of active nodes in the population. If the critical threshold is larger than
the warning threshold the population is expected to stay below them, otherwise it is expected to stay above them,
eg. --warning 50 --critical 40 alerts when nodes drop out of the population.

Deactivated nodes and nodes which have never had a catalog compiled are ignored.

Tested on PuppetDB 4.x - 7.x (v4 query API)

"""

from datetime import datetime, timezone
from enum import Enum
import sys
import time
import traceback
try:
    # pylint: disable=wrong-import-position
    from monscripts.utils import log, log_option, isInt, plural, ConfigurationError, ParseError
    from monscripts.check_result import Metric
    from monscripts import RestNagiosPlugin, Direction
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.3.0'

TIMESTAMP_FORMATS = ('%Y-%m-%dT%H:%M:%S.%f', '%Y-%m-%dT%H:%M:%S')


class CheckMode(Enum):
    AGE = 'age'
    NODE_COUNT = 'node_count'


def parse_timestamp(timestamp):
    """Returns epoch seconds for PuppetDB's UTC ISO 8601 timestamps, eg. 2026-10-19T10:21:57.512Z"""
    stripped = timestamp.strip()
    for suffix in ('Z', '+00:00'):
        if stripped.endswith(suffix):
            stripped = stripped[:-len(suffix)]
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(stripped, fmt).replace(tzinfo=timezone.utc).timestamp()
        except ValueError:
            pass
    raise ParseError("failed to parse catalog timestamp '{0}'".format(timestamp))


def node_ages(nodes, now=None):
    """Returns the catalog ages of the active nodes, newest first"""
    if not isinstance(nodes, list):
        raise ParseError('non-list returned by PuppetDB nodes query')
    if now is None:
        now = time.time()
    ages = []
    for node in nodes:
        if not isinstance(node, dict):
            raise ParseError('non-dict node item returned by PuppetDB nodes query')
        certname = node.get('certname')
        if node.get('deactivated'):
            log.debug("skipping deactivated node '%s'", certname)
            continue
        if not node.get('catalog_timestamp'):
            log.info("skipping node '%s' with no catalog", certname)
            continue
        ages.append(now - parse_timestamp(node['catalog_timestamp']))
    return sorted(ages)


class CheckPuppetDBNodes(RestNagiosPlugin):

    def __init__(self):
        super(CheckPuppetDBNodes, self).__init__()
        self.name = 'PuppetDB'
        self.default_host = 'puppet'
        self.default_port = 8081
        self.default_ssl = True
        self.headers = {'Accept': 'application/json'}
        self.strict_thresholds = True
        self.mode = None

    def add_options(self):
        super(CheckPuppetDBNodes, self).add_options()
        self.add_opt('--check-age', '--age', dest='mode', action='store_const', const=CheckMode.AGE,
                     help='Checks for nodes that have not checked in')
        self.add_opt('--check-nodes', '--nodes', dest='mode', action='store_const', const=CheckMode.NODE_COUNT,
                     help='Checks for the number of active nodes')
        self.add_opt('--query-path', default='/pdb/query/v4/nodes',
                     help='PuppetDB nodes query endpoint (default: /pdb/query/v4/nodes)')
        self.add_thresholds()

    def process_options(self):
        super(CheckPuppetDBNodes, self).process_options()
        self.no_args()
        self.mode = self.get_opt('mode')
        if self.mode is None:
            raise ConfigurationError('A mode like --check-age is needed')
        log_option('mode', self.mode.value)
        self.path = self.get_opt('query_path')
        log_option('query path', self.path)
        direction = Direction.UPPER
        if self.mode is CheckMode.NODE_COUNT:
            warning = self.get_opt('warning')
            critical = self.get_opt('critical')
            # a critical below warning means a minimum population
            if isInt(warning) and isInt(critical) and int(critical) < int(warning):
                direction = Direction.LOWER
        self.validate_thresholds(direction=direction, integer=True)

    def parse_json(self, json_data):
        ages = node_ages(json_data)
        log.info('found %s active node%s', len(ages), plural(ages))
        if self.mode is CheckMode.AGE:
            self.check_age(ages)
        else:
            self.check_node_count(ages)

    def check_age(self, ages):
        threshold = self.thresholds['']
        if not ages:
            self.result.add('Could not find any nodes', 'CRITICAL')
            self.result.add_perfdata(Metric('count', 0).perfdata())
            return
        oldest = ages[-1]
        status = threshold.evaluate(oldest)
        if status == 'OK':
            msg = '{0} nodes checking in sooner than {1} seconds'.format(len(ages), threshold.warning)
        else:
            bound = threshold.bound(status)
            msg = '{0} nodes not seen in {1} seconds'.format(len([_ for _ in ages if _ >= bound]), bound)
        self.result.add(msg, status)
        self.result.add_perfdata(Metric('oldest', oldest, threshold, uom='s').perfdata())
        self.result.add_perfdata(Metric('newest', ages[0], uom='s').perfdata())
        self.result.add_perfdata(Metric('count', len(ages)).perfdata())

    def check_node_count(self, ages):
        threshold = self.thresholds['']
        count = len(ages)
        status = threshold.evaluate(count)
        msg = '{0} nodes in population'.format(count)
        if status != 'OK':
            msg += ' but expected {0} {1}'.format('<' if threshold.direction is Direction.UPPER else '>',
                                                  threshold.bound(status))
        self.result.add(msg, status)
        if ages:
            self.result.add_perfdata(Metric('oldest', ages[-1], uom='s').perfdata())
            self.result.add_perfdata(Metric('newest', ages[0], uom='s').perfdata())
        self.result.add_perfdata(Metric('count', count, threshold, minimum=0).perfdata())


def main():
    CheckPuppetDBNodes().main()


if __name__ == '__main__':
    main()
