#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 17:48:14 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Nagios Plugin to count the files in a directory, optionally only those with names matching a regex

    check_dir.py --directory /var/spool/foo --warn 10 --crit 20 [--regex '\\.msg$']

"""

import os
import re
import sys
import traceback
try:
    # pylint: disable=wrong-import-position
    from monscripts.utils import log, log_option, plural, validate_directory, validate_regex, UnknownError
    from monscripts import NagiosPlugin
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.2.0'


class CheckDir(NagiosPlugin):

    def __init__(self):
        super(CheckDir, self).__init__()
        self.strict_thresholds = True
        self.directory = None
        self.regex = None

    def add_options(self):
        self.add_opt('-d', '--directory', help='Directory to check')
        self.add_opt('-r', '--regex', help='Only count files whose names match this regex')
        self.add_thresholds(units='number of files')

    def process_options(self):
        self.no_args()
        self.directory = self.get_opt('directory')
        validate_directory(self.directory)
        regex = self.get_opt('regex')
        if regex:
            validate_regex(regex)
            self.regex = re.compile(regex)
        self.validate_thresholds(integer=True)

    def count_files(self):
        if not os.path.isdir(self.directory):
            raise UnknownError('{0} does not exist or is not a directory'.format(self.directory))
        count = 0
        # os.listdir() never returns . or ..
        for name in os.listdir(self.directory):
            if self.regex and not self.regex.search(name):
                log.debug("skipping '%s', does not match regex", name)
                continue
            count += 1
        return count

    def run(self):
        count = self.count_files()
        log_option('file count', count)
        threshold = self.thresholds['']
        status = threshold.evaluate(count)
        msg = '{0} file{1} found in {2}'.format(count, plural(count), self.directory)
        if status != 'OK':
            msg += ' expected <= {0}'.format(threshold.bound(status))
        self.result.add(msg, status)
        self.result.add_perfdata('files={0}{1};0'.format(count, self.get_perf_thresholds()))


def main():
    CheckDir().main()


if __name__ == '__main__':
    main()
