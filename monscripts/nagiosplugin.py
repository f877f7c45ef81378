#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 12:05:48 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Nagios Plugin base class

Adds warning / critical threshold handling, the aggregated check result and the exit code routing
on top of the CLI base class. The exit code always matches the status printed.

"""

import sys
from monscripts.cli import CLI
from monscripts.check_result import CheckResult, Metric
from monscripts.threshold import Direction, Threshold
from monscripts.utils import log_option, CodingError, ConfigurationError, FetchTimeout
from monscripts.utils import to_number, validate_float, validate_int

__version__ = '0.5.0'


class NagiosPlugin(CLI):

    def __init__(self):
        super(NagiosPlugin, self).__init__()
        self.result = CheckResult()
        self.thresholds = {}
        self.threshold_names = []
        # some checks refuse nonsensical warning / critical ordering, some evaluate them literally
        self.strict_thresholds = False
        # latency probes report a timeout as CRITICAL since the probe itself failed
        self.timeout_status = 'UNKNOWN'
        self.error_prefix = ''
        self.perfdata = True

    @staticmethod
    def threshold_dest(name, kind):
        if name:
            return '{0}_{1}'.format(name.replace('-', '_'), kind)
        return kind

    def add_thresholds(self, name='', default_warning=None, default_critical=None,
                       warning_aliases=(), critical_aliases=(), units=''):
        if name:
            warning_flags = ['--{0}-warning'.format(name), '--{0}-warn'.format(name)]
            critical_flags = ['--{0}-critical'.format(name), '--{0}-crit'.format(name)]
            label = '{0} '.format(name.replace('-', ' '))
        else:
            warning_flags = ['-w', '--warning', '--warn']
            critical_flags = ['-c', '--critical', '--crit']
            label = ''
        units = ' {0}'.format(units) if units else ''
        self.add_opt(*(list(warning_aliases) + warning_flags), metavar='N',
                     dest=self.threshold_dest(name, 'warning'), default=default_warning,
                     help='Warning {0}threshold{1} (default: {2})'.format(label, units, default_warning))
        self.add_opt(*(list(critical_aliases) + critical_flags), metavar='N',
                     dest=self.threshold_dest(name, 'critical'), default=default_critical,
                     help='Critical {0}threshold{1} (default: {2})'.format(label, units, default_critical))
        self.threshold_names.append(name)

    def add_default_opts(self):
        super(NagiosPlugin, self).add_default_opts()
        self.add_opt('--no-perfdata', action='store_true', help='Do not output perfdata')
        if self.threshold_names:
            self.add_opt('--strict-thresholds', dest='strict_thresholds', action='store_true', default=None,
                         help='Refuse to run if warning is more extreme than critical (default: {0})'
                         .format('on' if self.strict_thresholds else 'off'))
            self.add_opt('--no-strict-thresholds', dest='strict_thresholds', action='store_false',
                         help='Apply warning and critical thresholds literally in whatever order given')

    def parse_args(self, args=None):
        super(NagiosPlugin, self).parse_args(args)
        self.perfdata = not self.get_opt('no_perfdata')
        if self.threshold_names and self.get_opt('strict_thresholds') is not None:
            self.strict_thresholds = self.get_opt('strict_thresholds')
        log_option('strict thresholds', self.strict_thresholds)

    def validate_thresholds(self, name='', direction=Direction.UPPER, integer=False):
        if name not in self.threshold_names:
            raise CodingError("thresholds '{0}' validated but never added".format(name))
        label = '{0} '.format(name.replace('-', ' ')) if name else ''
        flag = '--{0}-'.format(name) if name else '--'
        warning = self.get_opt(self.threshold_dest(name, 'warning'))
        critical = self.get_opt(self.threshold_dest(name, 'critical'))
        if warning is None:
            raise ConfigurationError('{0}warning threshold not defined, please specify {1}warning'.format(label, flag))
        if critical is None:
            raise ConfigurationError('{0}critical threshold not defined, please specify {1}critical'
                                     .format(label, flag))
        for value, kind in ((warning, 'warning'), (critical, 'critical')):
            if integer:
                validate_int(value, '{0}{1} threshold'.format(label, kind))
            else:
                validate_float(value, '{0}{1} threshold'.format(label, kind))
        threshold = Threshold(to_number(warning), to_number(critical), direction, name)
        if self.strict_thresholds:
            threshold.validate_ordering()
        self.thresholds[name] = threshold
        return threshold

    def get_perf_thresholds(self, name=''):
        return self.thresholds[name].perfdata()

    def add_metric(self, name, value, threshold=None, message=None, uom='', minimum=None, maximum=None):
        """Evaluates value against the named thresholds (if any) and records its message and perfdata"""
        if threshold is not None:
            threshold = self.thresholds[threshold]
        return self.result.add_metric(Metric(name, value, threshold, uom, minimum, maximum), message)

    def warning(self):
        self.result.escalate('WARNING')

    def handle_error(self, error):
        status = error.status
        if isinstance(error, FetchTimeout):
            status = self.timeout_status
        self.result.fail(status, '{0}{1}'.format(self.error_prefix, error))

    def end(self):
        print(self.result.output(perfdata=self.perfdata))
        sys.exit(self.result.exit_code())

    def main(self, args=None):
        super(NagiosPlugin, self).main(args)
        self.end()
