#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 20:02:51 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Nagios Plugin to check when Puppet last ran and how many resources failed in that run

Should be run as root, perhaps via NRPE. Uses Puppet's last_run_summary.yaml to find out when Puppet
last ran, falling back to the age of the state file, and the number of failed resource events.

Both the failure count and the time since the last run are checked against their own thresholds and the
worst result is returned. --check-failures or --check-age restrict the check to just one of them.

Machines where Puppet outright failed to run, eg. on missing dependencies or catalog compilation failure,
still write a valid summary file but without any events in it. These are always CRITICAL.

Puppet is considered disabled when the lock file exists but is empty. A disabled Puppet that otherwise
looks fine raises a WARNING, unless --only-enabled is given in which case disabled machines are never
alerted on.

"""

from enum import Enum
import os
import sys
import time
import traceback
try:
    import yaml
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)
try:
    # pylint: disable=wrong-import-position
    from monscripts.utils import log, log_option, plural
    from monscripts.check_result import Metric
    from monscripts import NagiosPlugin
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.3.0'

# failure count used for runs which failed outright, high enough to breach any sane threshold
TOTAL_FAILURE_COUNT = 99


class CheckMode(Enum):
    ALL = 'all'
    FAILURES = 'failures'
    AGE = 'age'


class PuppetState(object):

    def __init__(self):
        self.enabled = True
        self.running = False
        self.last_run = 0
        self.failures = 0
        self.total_failure = False


def read_summary(summary_file):
    """Returns (last_run, failures, total_failure) from a last_run_summary.yaml file"""
    with open(summary_file) as filehandle:
        summary = yaml.safe_load(filehandle)
    last_run = int(summary['time']['last_run'])
    if 'events' not in summary:
        return (last_run, TOTAL_FAILURE_COUNT, True)
    # the failure count is only present when there were failures
    failures = (summary['events'] or {}).get('failure') or 0
    return (last_run, int(failures), False)


def read_state(lock_file, state_file, summary_file):
    state = PuppetState()
    if os.path.exists(lock_file):
        if os.path.getsize(lock_file) == 0:
            state.enabled = False
        else:
            state.running = True
    if os.path.exists(state_file):
        state.last_run = int(os.path.getmtime(state_file))
    if os.path.exists(summary_file):
        try:
            (state.last_run, state.failures, state.total_failure) = read_summary(summary_file)
        except (IOError, yaml.YAMLError, KeyError, TypeError, ValueError, AttributeError) as _:
            log.info("failed to read summary file '%s', using state file age: %s", summary_file, _)
    log.info('enabled = %s, running = %s, last run = %s, failures = %s, total failure = %s',
             state.enabled, state.running, state.last_run, state.failures, state.total_failure)
    return state


class CheckPuppet(NagiosPlugin):

    def __init__(self):
        super(CheckPuppet, self).__init__()
        self.lock_file = None
        self.state_file = None
        self.summary_file = None
        self.only_enabled = False
        self.mode = CheckMode.ALL

    def add_options(self):
        self.add_thresholds(default_warning=1, default_critical=5, units='for failed resources')
        self.add_thresholds('time', default_warning=1900, default_critical=3700, units='for seconds since last run',
                            warning_aliases=('-u', '--warn_time'), critical_aliases=('-x', '--critical_time'))
        self.add_opt('-e', '--only-enabled', action='store_true', help='Only alert if Puppet is enabled')
        self.add_opt('-l', '--lock-file', default='/var/lib/puppet/state/puppetdlock',
                     help='Location of the lock file (default: /var/lib/puppet/state/puppetdlock)')
        self.add_opt('-T', '--state-file', default='/var/lib/puppet/state/state.yaml',
                     help='Location of the state file (default: /var/lib/puppet/state/state.yaml)')
        self.add_opt('-s', '--summary-file', default='/var/lib/puppet/state/last_run_summary.yaml',
                     help='Location of the summary file (default: /var/lib/puppet/state/last_run_summary.yaml)')
        self.add_opt('--check-failures', dest='mode', action='store_const', const=CheckMode.FAILURES,
                     default=CheckMode.ALL, help='Only check the number of failed resources')
        self.add_opt('--check-age', dest='mode', action='store_const', const=CheckMode.AGE,
                     help='Only check the time since the last run')

    def process_options(self):
        self.no_args()
        self.lock_file = self.get_opt('lock_file')
        self.state_file = self.get_opt('state_file')
        self.summary_file = self.get_opt('summary_file')
        self.only_enabled = self.get_opt('only_enabled')
        self.mode = self.get_opt('mode')
        log_option('lock file', self.lock_file)
        log_option('state file', self.state_file)
        log_option('summary file', self.summary_file)
        log_option('only enabled', self.only_enabled)
        log_option('mode', self.mode.value)
        self.validate_thresholds(integer=True)
        self.validate_thresholds('time', integer=True)

    def check_metric(self, name, value, threshold, msg, uom=''):
        threshold = self.thresholds[threshold]
        status = threshold.evaluate(value)
        if status != 'OK':
            msg += ', expected < {0}'.format(threshold.bound(status))
        self.result.add(msg, status)
        self.result.add_perfdata(Metric(name, value, threshold, uom=uom).perfdata())

    def run(self):
        state = read_state(self.lock_file, self.state_file, self.summary_file)
        since_last_run = int(time.time()) - state.last_run
        prefix = '' if state.enabled else 'Puppet disabled. '
        perfdata = [
            Metric('time_since_last_run', since_last_run, self.thresholds['time'], uom='s').perfdata(),
            Metric('failures', state.failures, self.thresholds['']).perfdata()
        ]
        if self.only_enabled and not state.enabled:
            self.result.add('{0}Not alerting due to -e flag. Last run {1} seconds ago with {2} failure{3}'
                            .format(prefix, since_last_run, state.failures, plural(state.failures)), 'OK')
            self.result.perfdata = perfdata
            return
        if state.total_failure:
            self.result.add('FAILED - Puppet failed to run. Missing dependencies? Catalog compilation failed? ' +
                            'Puppet last ran {0} seconds ago'.format(since_last_run), 'CRITICAL')
            self.result.perfdata = perfdata
            return
        if self.mode in (CheckMode.ALL, CheckMode.FAILURES):
            self.check_metric('failures', state.failures, '',
                              'Puppet last run had {0} failure{1}'.format(state.failures, plural(state.failures)))
        if self.mode in (CheckMode.ALL, CheckMode.AGE):
            self.check_metric('time_since_last_run', since_last_run, 'time',
                              'Puppet last ran {0} seconds ago'.format(since_last_run), uom='s')
        self.result.messages[0] = prefix + self.result.messages[0]
        # a disabled Puppet isn't doing its job even if the last run was fine
        if not state.enabled:
            self.warning()


def main():
    CheckPuppet().main()


if __name__ == '__main__':
    main()
