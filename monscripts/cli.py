#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 11:31:55 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

CLI base class for the monitoring scripts

Subclasses implement add_options(), process_options() and run(), then call main() which parses the
command line once, arms the self timeout and turns any error into a single status line plus exit code

"""

from optparse import OptionParser
from types import MappingProxyType
import logging
import math
import signal
import sys
import traceback
from monscripts.utils import log, log_option, prog, plural, ERRORS
from monscripts.utils import CodingError, ConfigurationError, FetchTimeout, NagiosError, UnknownError
from monscripts.utils import qquit, validate_int

__version__ = '0.4.0'


class CLIOptionParser(OptionParser):

    # optparse exits 2 on bad switches which would read as CRITICAL to Nagios
    def error(self, msg):
        self.print_usage(sys.stdout)
        print('{0}: error: {1}'.format(self.get_prog_name(), msg))
        sys.exit(ERRORS['UNKNOWN'])


class CLI(object):

    def __init__(self):
        self._prog = prog
        self.name = ''
        self.version = __version__
        self.usagemsg = None
        self.__parser = None
        self.options = MappingProxyType({})
        self.args = []
        self.timeout = None
        self.timeout_default = 10
        self.timeout_max = 86400
        self.verbose = 0

    def add_options(self):
        pass

    def process_options(self):
        pass

    def process_args(self):
        pass

    def run(self):
        raise CodingError('run() not implemented in {0}'.format(self.__class__.__name__))

    def add_opt(self, *args, **kwargs):
        self.__parser.add_option(*args, **kwargs)

    def get_opt(self, name):
        if name not in self.options:
            raise CodingError("option '{0}' requested but not defined".format(name))
        return self.options[name]

    def add_default_opts(self):
        self.add_opt('-h', '--help', action='store_true', help='Show full help and exit')
        self.add_opt('-V', '--version', action='store_true', help='Show version and exit')
        self.add_opt('-v', '--verbose', action='count', default=0,
                     help='Verbose mode (-v, -vv for debug)')
        if self.timeout_default is not None:
            self.add_opt('-t', '--timeout', default=self.timeout_default, metavar='secs',
                         help='Timeout in secs (default: {0})'.format(self.timeout_default))

    def usage(self, msg='', status='UNKNOWN'):
        if msg:
            print('{0}\n'.format(msg))
        self.__parser.print_help(sys.stdout)
        sys.exit(ERRORS[status])

    def no_args(self):
        if self.args:
            raise ConfigurationError('invalid non-switch arguments supplied on command line: {0}'
                                     .format(' '.join(self.args)))

    def parse_args(self, args=None):
        self.__parser = CLIOptionParser(usage=self.usagemsg, add_help_option=False, prog=self._prog)
        self.add_options()
        self.add_default_opts()
        (options, self.args) = self.__parser.parse_args(args)
        # settings are resolved once here and are read only from this point on
        self.options = MappingProxyType(dict(vars(options)))
        if self.get_opt('help'):
            self.usage()
        if self.get_opt('version'):
            print('{0} version {1}'.format(self._prog, self.version))
            sys.exit(ERRORS['UNKNOWN'])
        self.verbose = self.get_opt('verbose')
        if self.verbose >= 2:
            log.setLevel(logging.DEBUG)
        elif self.verbose == 1:
            log.setLevel(logging.INFO)
        else:
            log.setLevel(logging.WARNING)
        log_option('verbose', self.verbose)
        if self.timeout_default is not None:
            timeout = self.get_opt('timeout')
            validate_int(timeout, 'timeout', 1, self.timeout_max)
            self.timeout = int(timeout)

    def setup(self, args=None):
        self.parse_args(args)
        self.process_options()
        self.process_args()

    def timeout_handler(self, signum, frame):  # pylint: disable=unused-argument
        raise FetchTimeout('self timed out after {0} second{1}'.format(self.timeout, plural(self.timeout)))

    def start_timer(self):
        if self.timeout is None:
            return
        log.debug('setting timeout alarm (%s secs)', self.timeout)
        signal.signal(signal.SIGALRM, self.timeout_handler)
        signal.alarm(int(math.ceil(self.timeout)))

    @staticmethod
    def cancel_timer():
        signal.alarm(0)

    def handle_error(self, error):
        qquit(error.status, str(error))

    def execute(self, args=None):
        """Runs the single shot pipeline, letting NagiosError propagate to the caller"""
        self.setup(args)
        self.start_timer()
        try:
            self.run()
        finally:
            self.cancel_timer()

    def main(self, args=None):
        try:
            self.execute(args)
        except NagiosError as _:
            self.handle_error(_)
        except Exception as _:  # pylint: disable=broad-except
            log.debug(traceback.format_exc())
            self.handle_error(UnknownError('{0}: {1}'.format(type(_).__name__, _)))
