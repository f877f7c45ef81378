#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 17:20:58 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Nagios Plugin to check the expiry of an X509 certificate or the next update time of a CRL

Check a certificate:

    check_cert.py --cert /path/to/cert --warn WARN --crit CRIT

Check a CRL:

    check_cert.py --crl /path/to/crl --warn WARN --crit CRIT

Thresholds are the number of seconds before expiry to raise a warning / critical, so the warning
threshold must be greater than or equal to the critical threshold.

Requires the 'openssl' command in the $PATH

"""

from datetime import datetime
from enum import Enum
from subprocess import Popen, PIPE
import calendar
import os
import re
import sys
import time
import traceback
try:
    # pylint: disable=wrong-import-position
    from monscripts.utils import log, log_option, sec2human, ConfigurationError, ParseError, UnknownError
    from monscripts import NagiosPlugin, Direction
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.3.0'


class CertMode(Enum):
    CERT = 'cert'
    CRL = 'crl'


OPENSSL = {
    CertMode.CERT: {
        'description': 'Certificate',
        'date_description': 'Certificate end date',
        'args': ['x509', '-noout', '-enddate'],
        'regex': re.compile(r'notAfter=(.+)'),
    },
    CertMode.CRL: {
        'description': 'CRL',
        'date_description': 'CRL next update date',
        'args': ['crl', '-noout', '-nextupdate'],
        'regex': re.compile(r'nextUpdate=(.+)'),
    },
}


def parse_openssl_date(date):
    """Parses openssl's date format, eg. 'Jun  1 12:00:00 2030 GMT', returning epoch seconds"""
    date = date.strip()
    for date_format in ('%b %d %H:%M:%S %Y %Z', '%b %d %H:%M:%S %Y'):
        try:
            return calendar.timegm(datetime.strptime(date, date_format).timetuple())
        except ValueError:
            continue
    raise ValueError("unrecognized date '{0}'".format(date))


class CheckCert(NagiosPlugin):

    def __init__(self):
        super(CheckCert, self).__init__()
        self.strict_thresholds = True
        self.mode = None
        self.path = None

    def add_options(self):
        self.add_opt('--cert', metavar='PATH', help='Certificate to check')
        self.add_opt('--crl', metavar='PATH', help='CRL to check')
        self.add_thresholds(units='in seconds before expiry')

    def process_options(self):
        self.no_args()
        cert = self.get_opt('cert')
        crl = self.get_opt('crl')
        if cert and crl:
            raise ConfigurationError('--cert and --crl are mutually exclusive')
        if cert:
            self.mode = CertMode.CERT
            self.path = cert
        elif crl:
            self.mode = CertMode.CRL
            self.path = crl
        else:
            raise ConfigurationError("Don't know what to check, please specify --cert or --crl")
        log_option(self.mode.value, self.path)
        self.validate_thresholds(direction=Direction.LOWER, integer=True)

    def openssl(self):
        cmd = ['openssl'] + OPENSSL[self.mode]['args'][:1] + ['-in', self.path] + OPENSSL[self.mode]['args'][1:]
        log.debug('running: %s', ' '.join(cmd))
        try:
            process = Popen(cmd, stdout=PIPE, stderr=PIPE)
        except OSError as _:
            raise UnknownError("failed to run '{0}': {1}".format(cmd[0], _))
        (stdout, stderr) = process.communicate()
        log.debug('returncode: %s, stdout: %s, stderr: %s', process.returncode, stdout, stderr)
        if process.returncode != 0:
            raise ParseError('{0} could not be parsed, openssl returned {1}: {2}'
                             .format(OPENSSL[self.mode]['date_description'], process.returncode,
                                     ' '.join(stderr.decode('utf-8', 'replace').split())))
        return stdout.decode('utf-8', 'replace')

    def expiry_time(self):
        description = OPENSSL[self.mode]['date_description']
        output = self.openssl()
        match = OPENSSL[self.mode]['regex'].search(output)
        if not match:
            raise ParseError('{0} could not be parsed'.format(description))
        try:
            return parse_openssl_date(match.group(1))
        except ValueError as _:
            raise ParseError('{0} could not be parsed: {1}'.format(description, _))

    def run(self):
        if not os.path.isfile(self.path):
            raise UnknownError("{0} {1} doesn't exist".format(OPENSSL[self.mode]['description'], self.path))
        seconds = int(self.expiry_time() - time.time())
        log.info('%s seconds until expiry', seconds)
        if seconds < 0:
            msg = '{0} expired {1} ago'.format(self.path, sec2human(seconds))
        else:
            msg = '{0} expires in {1}'.format(self.path, sec2human(seconds))
        self.add_metric('seconds_left', seconds, threshold='', uom='s', message=msg)


def main():
    CheckCert().main()


if __name__ == '__main__':
    main()
