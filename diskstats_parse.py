#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 19:31:26 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Parses /proc/diskstats and prints the stats of a single device, one field per line

Intended to be run from SNMP using the exec directive, eg.

    exec .1.3.6.1.4.1.xxxxxx.1 sdaStats /usr/local/bin/diskstats_parse.py --device sda

replacing xxxxxx with your registered OID number.

--named prints space separated name:value pairs instead, suitable for Cacti.

"""

import re
import sys
import traceback
try:
    # pylint: disable=wrong-import-position
    from monscripts.utils import log, log_option, ConfigurationError, ParseError, UnknownError
    from monscripts import CLI
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.2.0'

# newer kernels append the discard (4.18) and flush (5.5) fields
FIELD_NAMES = (
    'major',
    'minor',
    'device',
    'reads_completed',
    'reads_merged',
    'sectors_read',
    'read_time_ms',
    'writes_completed',
    'writes_merged',
    'sectors_written',
    'write_time_ms',
    'ios_in_progress',
    'io_time_ms',
    'weighted_io_time_ms',
    'discards_completed',
    'discards_merged',
    'sectors_discarded',
    'discard_time_ms',
    'flushes_completed',
    'flush_time_ms',
)


def find_device(lines, device):
    regex = re.compile(r'\s{0}\s'.format(re.escape(device)))
    for line in lines:
        if regex.search(line):
            return line.split()
    return None


class DiskStatsParse(CLI):

    def __init__(self):
        super(DiskStatsParse, self).__init__()
        self.device = None
        self.file = None
        self.named = False

    def add_options(self):
        self.add_opt('-d', '--device', help='The device to retrieve stats for, eg. sda')
        self.add_opt('-f', '--file', default='/proc/diskstats', help='Stats file (default: /proc/diskstats)')
        self.add_opt('-n', '--named', action='store_true', help='Print name:value pairs on a single line')

    def process_options(self):
        self.no_args()
        self.device = self.get_opt('device')
        if not self.device:
            raise ConfigurationError('Please specify a device with --device')
        log_option('device', self.device)
        self.file = self.get_opt('file')
        log_option('file', self.file)
        self.named = self.get_opt('named')

    def handle_error(self, error):
        if not isinstance(error, ConfigurationError):
            error = UnknownError('Failed to parse {0}: {1}'.format(self.file, error))
        super(DiskStatsParse, self).handle_error(error)

    def run(self):
        try:
            with open(self.file) as filehandle:
                fields = find_device(filehandle, self.device)
        except IOError as _:
            raise UnknownError(_)
        if fields is None:
            raise ParseError('Could not find stats for device {0}'.format(self.device))
        log.debug('fields: %s', fields)
        if self.named:
            print(' '.join(['{0}:{1}'.format(name, value) for name, value in zip(FIELD_NAMES, fields)]))
        else:
            for field in fields:
                print(field)


def main():
    DiskStatsParse().main()


if __name__ == '__main__':
    main()
