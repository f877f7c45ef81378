#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 18:15:30 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Nagios Plugin to check the number of busy servers reported by Lighttpd's mod_status

To set up Lighttpd for this add something like:

    $HTTP["remoteip"] =~ "^(10|127)" {
        status.status-url = "/server-status"
    }

"""

import sys
import traceback
try:
    import yaml
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)
try:
    # pylint: disable=wrong-import-position
    from monscripts.utils import log, log_option, isInt, ParseError
    from monscripts import RestNagiosPlugin
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.2.0'


class CheckLighttpdLoad(RestNagiosPlugin):

    def __init__(self):
        super(CheckLighttpdLoad, self).__init__()
        self.name = 'Lighttpd'
        self.default_port = 80
        self.json = False

    def add_options(self):
        super(CheckLighttpdLoad, self).add_options()
        self.add_opt('-u', '--url', default='/server-status', help='Status URL path (default: /server-status)')
        self.add_thresholds(units='for busy servers')

    def process_options(self):
        super(CheckLighttpdLoad, self).process_options()
        url = self.get_opt('url')
        if not url.startswith('/'):
            url = '/' + url
        # ?auto gives the machine readable key: value format
        self.path = url + '?auto'
        log_option('path', self.path)
        self.validate_thresholds()

    def parse(self, content):
        try:
            stats = yaml.safe_load(content)
        except yaml.YAMLError as _:
            log.debug('YAML error: %s', _)
            stats = None
        if not isinstance(stats, dict) or 'BusyServers' not in stats:
            raise ParseError('Could not parse lighttpd statistics')
        busy_servers = stats['BusyServers']
        if not isInt(busy_servers):
            raise ParseError("Could not parse lighttpd statistics, non-integer BusyServers '{0}'"
                             .format(busy_servers))
        busy_servers = int(busy_servers)
        self.add_metric('busy_servers', busy_servers, threshold='', minimum=0,
                        message='{0} lighttpd busy servers'.format(busy_servers))


def main():
    CheckLighttpdLoad().main()


if __name__ == '__main__':
    main()
