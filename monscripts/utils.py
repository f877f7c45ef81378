#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 10:12:41 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Utility functions, status codes and exceptions shared by the monitoring scripts

"""

from datetime import timedelta
import logging
import os
import re
import sys
import humanize

__version__ = '0.4.0'

prog = os.path.basename(sys.argv[0])

logging.basicConfig(format='%(levelname)s: %(message)s')
log = logging.getLogger('monscripts')

# Standard Nagios return codes
ERRORS = {
    'OK': 0,
    'WARNING': 1,
    'CRITICAL': 2,
    'UNKNOWN': 3,
}


class CodingError(Exception):
    pass


class NagiosError(Exception):
    status = 'UNKNOWN'


class CriticalError(NagiosError):
    status = 'CRITICAL'


class UnknownError(NagiosError):
    status = 'UNKNOWN'


class ConfigurationError(UnknownError):
    pass


class FetchError(UnknownError):
    pass


class FetchTimeout(FetchError):
    pass


class ParseError(UnknownError):
    pass


def worst_status(*statuses):
    """Returns the status with the highest exit code, ignoring None"""
    statuses = [_ for _ in statuses if _ is not None]
    for status in statuses:
        if status not in ERRORS:
            raise CodingError("invalid status '{0}' passed to worst_status()".format(status))
    if not statuses:
        return None
    return max(statuses, key=lambda _: ERRORS[_])


def qquit(status, msg=''):
    if status not in ERRORS:
        raise CodingError("invalid status '{0}' passed to qquit()".format(status))
    if msg:
        print('{0}: {1}'.format(status, msg))
    else:
        print(status)
    sys.exit(ERRORS[status])


def isInt(arg, allow_negative=False):
    if arg is None:
        return False
    if allow_negative:
        return re.match(r'^-?\d+$', str(arg)) is not None
    return re.match(r'^\d+$', str(arg)) is not None


def isFloat(arg, allow_negative=False):
    if arg is None:
        return False
    if allow_negative:
        return re.match(r'^-?\d+(?:\.\d+)?$', str(arg)) is not None
    return re.match(r'^\d+(?:\.\d+)?$', str(arg)) is not None


def to_number(arg):
    """Converts a validated numeric string to int where possible, otherwise float"""
    if isinstance(arg, (int, float)):
        return arg
    if isInt(arg, allow_negative=True):
        return int(arg)
    return float(arg)


def plural(arg):
    try:
        if float(arg) == 1:
            return ''
    except (TypeError, ValueError):
        if arg is not None and len(arg) == 1:
            return ''
    return 's'


def getenvs(*names, **kwargs):
    """Returns the first environment variable set from the given names or the default= keyword"""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return kwargs.get('default')


def log_option(name, value):
    log.debug('%-20s %s', '{0}:'.format(name), value)


def sec2human(secs):
    """Renders seconds as a human readable period down to minutes, eg. '2 days and 3 minutes'"""
    secs = abs(int(secs))
    if secs < 60:
        return '{0} second{1}'.format(secs, plural(secs))
    return humanize.precisedelta(timedelta(seconds=secs), minimum_unit='minutes', format='%0.0f')


def read_password(password):
    """A password starting with / naming an existing file is replaced by the first line of that file"""
    if password and password.startswith('/') and os.path.isfile(password):
        log.debug("reading password from file '%s'", password)
        with open(password) as filehandle:
            lines = filehandle.read().splitlines()
        return lines[0].strip() if lines else ''
    return password


host_regex = re.compile(r'^(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)' +
                        r'(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*\.?$')
ip_regex = re.compile(r'^((25[0-5]|2[0-4]\d|[01]\d\d|\d?\d)\.){3}(25[0-5]|2[0-4]\d|[01]\d\d|\d?\d)$')


def validate_host(host, name=''):
    name = '{0} '.format(name) if name else ''
    if not host:
        raise ConfigurationError('{0}host not defined'.format(name))
    if not (ip_regex.match(host) or host_regex.match(host)):
        raise ConfigurationError("invalid {0}host '{1}' defined".format(name, host))
    log_option('{0}host'.format(name), host)


def validate_port(port, name=''):
    name = '{0} '.format(name) if name else ''
    if not isInt(port) or not 1 <= int(port) <= 65535:
        raise ConfigurationError("invalid {0}port '{1}' defined, must be between 1 and 65535".format(name, port))
    log_option('{0}port'.format(name), port)


def validate_int(arg, name, min_value=None, max_value=None):
    if not isInt(arg, allow_negative=True):
        raise ConfigurationError("invalid {0} '{1}' defined, must be an integer".format(name, arg))
    arg = int(arg)
    if min_value is not None and arg < min_value:
        raise ConfigurationError('invalid {0} defined, cannot be less than {1}'.format(name, min_value))
    if max_value is not None and arg > max_value:
        raise ConfigurationError('invalid {0} defined, cannot be greater than {1}'.format(name, max_value))
    log_option(name, arg)


def validate_float(arg, name, min_value=None, max_value=None):
    if not isFloat(arg, allow_negative=True):
        raise ConfigurationError("invalid {0} '{1}' defined, must be a number".format(name, arg))
    arg = float(arg)
    if min_value is not None and arg < min_value:
        raise ConfigurationError('invalid {0} defined, cannot be less than {1}'.format(name, min_value))
    if max_value is not None and arg > max_value:
        raise ConfigurationError('invalid {0} defined, cannot be greater than {1}'.format(name, max_value))
    log_option(name, arg)


def validate_directory(path, name='directory'):
    if not path:
        raise ConfigurationError('{0} not defined'.format(name))
    log_option(name, path)


def validate_regex(regex, name='regex'):
    try:
        re.compile(regex)
    except re.error as _:
        raise ConfigurationError("invalid {0} '{1}' defined: {2}".format(name, regex, _))
    log_option(name, regex)
