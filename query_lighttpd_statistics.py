#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 18:40:02 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Cacti data query script for Lighttpd FastCGI backend statistics from mod_status' /server-counters

    query_lighttpd_statistics.py <host>[:<port>] index
    query_lighttpd_statistics.py <host>[:<port>] query <field>
    query_lighttpd_statistics.py <host>[:<port>] get <field> <backend>

index lists the FastCGI backends, query prints backend:value for every backend and get prints the value
for a single backend. Counters of all the processes of a backend are summed.

Fields: connected, died, disabled, load, overloaded, processes

"""

from enum import Enum
import re
import sys
import traceback
try:
    # pylint: disable=wrong-import-position
    from monscripts.utils import log, log_option, validate_host, validate_port, ConfigurationError, UnknownError
    from monscripts import CLI, RequestHandler
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.2.0'

COUNTER_REGEX = re.compile(r'^fastcgi\.backend\.(.+)\.(\d+)\.(connected|died|disabled|load|overloaded): (\d+)$')

COUNTERS = ('connected', 'died', 'disabled', 'load', 'overloaded')

FIELDS = COUNTERS + ('processes',)


class Command(Enum):
    INDEX = 'index'
    QUERY = 'query'
    GET = 'get'


def parse_counters(content):
    """Returns a dict of backend name => dict of summed counters plus the number of processes"""
    backends = {}
    processes = {}
    for line in content.splitlines():
        line = line.strip()
        match = COUNTER_REGEX.match(line)
        if not match:
            log.debug("skipping unparsable line '%s'", line)
            continue
        (backend, instance, counter, value) = match.groups()
        if backend not in backends:
            backends[backend] = dict([(field, 0) for field in FIELDS])
            processes[backend] = set()
        backends[backend][counter] += int(value)
        processes[backend].add(instance)
        backends[backend]['processes'] = len(processes[backend])
    return backends


class QueryLighttpdStatistics(CLI):

    def __init__(self):
        super(QueryLighttpdStatistics, self).__init__()
        self.usagemsg = '%prog [options] <host>[:<port>] index|query|get [<field> [<backend>]]'
        self.host = None
        self.path = None
        self.command = None
        self.field = None
        self.backend = None
        self.request_handler = None

    def add_options(self):
        self.add_opt('--path', default='/server-counters',
                     help='Path of the Lighttpd statistics counters (default: /server-counters)')

    def process_args(self):
        if len(self.args) < 2:
            raise ConfigurationError('Please specify a host and command')
        self.host = self.args[0]
        # host may carry a port, as in web1:8080
        (host, _, port) = self.host.partition(':')
        validate_host(host)
        if port:
            validate_port(port)
        try:
            self.command = Command(self.args[1])
        except ValueError:
            raise ConfigurationError('Unknown command: {0}'.format(self.args[1]))
        log_option('command', self.command.value)
        if self.command in (Command.QUERY, Command.GET):
            if len(self.args) < 3:
                raise ConfigurationError('Please specify a field for the {0} command'.format(self.command.value))
            self.field = self.args[2]
            if self.field not in FIELDS:
                raise ConfigurationError("Unknown field '{0}', must be one of: {1}"
                                         .format(self.field, ', '.join(FIELDS)))
        if self.command is Command.GET:
            if len(self.args) < 4:
                raise ConfigurationError('Please specify a backend for the get command')
            self.backend = self.args[3]
        self.path = self.get_opt('path')
        self.request_handler = RequestHandler(timeout=self.timeout)

    def fetch(self):
        url = 'http://{host}{path}'.format(host=self.host, path=self.path)
        return parse_counters(self.request_handler.get(url).text)

    def run(self):
        backends = self.fetch()
        if self.command is Command.INDEX:
            for backend in sorted(backends):
                print(backend)
        elif self.command is Command.QUERY:
            for backend, stats in backends.items():
                print('{0}:{1}'.format(backend, stats[self.field]))
        elif self.command is Command.GET:
            if self.backend not in backends:
                raise UnknownError("backend '{0}' not found in Lighttpd statistics".format(self.backend))
            print(backends[self.backend][self.field])


def main():
    QueryLighttpdStatistics().main()


if __name__ == '__main__':
    main()
