#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 16:12:09 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Nagios Plugin to check a STOMP broker end-to-end by publishing a unique message to a queue or topic
and waiting for it to come back

Thresholds apply to the round trip time in seconds. The critical threshold is also the plugin timeout,
a message not returned within it is a failed probe and so CRITICAL rather than UNKNOWN. A message that
comes back different to what was sent (corrupted, truncated or a stray message on the destination)
is CRITICAL too.

If multiple Nagios servers monitor the same broker each should use its own topic rather than a shared
queue. Temporary topics are not used as they fail in certain middleware topologies.

The --password switch accepts either the password or the path to a file holding it on its first line.

"""

import random
import sys
import time
import traceback
try:
    # pylint: disable=wrong-import-position
    from monscripts.utils import log, log_option, CriticalError, FetchTimeout
    from monscripts.check_result import Metric
    from monscripts import StompNagiosPlugin
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.4.0'


def generate_token():
    return ''.join([str(random.randint(0, 99)) for _ in range(10)])


class CheckActiveMQ(StompNagiosPlugin):

    def __init__(self):
        super(CheckActiveMQ, self).__init__()
        # the critical threshold doubles as the timeout
        self.timeout_default = None
        self.timeout_status = 'CRITICAL'
        self.destination = None
        self.elapsed = None

    def add_options(self):
        super(CheckActiveMQ, self).add_options()
        self.add_opt('-d', '--destination', default='/topic/nagios.monitor',
                     help='Topic or queue to send the test message through (default: /topic/nagios.monitor)')
        self.add_thresholds(default_warning=2, default_critical=5, units='for round trip seconds')

    def process_options(self):
        super(CheckActiveMQ, self).process_options()
        self.destination = self.get_opt('destination')
        log_option('destination', self.destination)
        self.validate_thresholds(integer=True)
        self.timeout = self.thresholds[''].critical
        log_option('timeout', self.timeout)

    def probe(self):
        with self.stomp_client() as client:
            client.subscribe(self.destination)
            token = generate_token()
            log.info("sending token '%s' to '%s'", token, self.destination)
            client.publish(self.destination, token)
            body = client.receive(timeout=self.timeout)
        log.info("received '%s'", body)
        if body != token:
            raise CriticalError("sent '{0}' but received '{1}', possible corruption or misconfiguration"
                                .format(token, body))

    def run(self):
        start_time = time.time()
        timed_out = False
        try:
            self.probe()
        except FetchTimeout as _:
            log.info('probe timed out: %s', _)
            timed_out = True
        except CriticalError as _:
            self.result.add(str(_), 'CRITICAL')
        except Exception as _:  # pylint: disable=broad-except
            self.result.add('Unexpected error during test: {0}'.format(_), 'CRITICAL')
        self.elapsed = time.time() - start_time
        threshold = self.thresholds['']
        status = threshold.evaluate(self.elapsed)
        if timed_out:
            status = 'CRITICAL'
        if status != 'OK':
            self.result.add('Test took {0:.2f} to complete expected < {1}'
                            .format(self.elapsed, threshold.bound(status)), status)
        elif not self.result.messages:
            self.result.add('Test completed in {0:.2f} seconds'.format(self.elapsed), 'OK')
        self.result.add_perfdata(Metric('seconds', round(self.elapsed, 6), threshold).perfdata())


def main():
    CheckActiveMQ().main()


if __name__ == '__main__':
    main()
