#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 16:47:36 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Cacti data input script returning ActiveMQ broker or queue statistics via the ActiveMQ Statistics Plugin

Report stats for the queue foo.bar:

    activemq_cacti_stats.py --host broker1 --report foo.bar

Report stats for the broker:

    activemq_cacti_stats.py --host broker1 --report broker

Output is space separated key:value pairs as Cacti expects, eg.

    size:12 enqueueCount:540 dequeueCount:528 memoryPercentUsage:0 ...

Multiple --host switches may be given for active / passive clusters, they are tried in order.

"""

import sys
import traceback
try:
    # pylint: disable=wrong-import-position
    from monscripts.activemq import default_reply_to, fetch_statistics, StatisticsTarget
    from monscripts.utils import log_option, ERRORS
    from monscripts import CLI, StompOptions
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.2.0'


class ActiveMQCactiStats(StompOptions, CLI):

    default_stomp_port = 6163

    def __init__(self):
        super(ActiveMQCactiStats, self).__init__()
        self.timeout_default = 2
        self.hosts = None
        self.port = None
        self.user = None
        self.password = None
        self.target = None
        self.reply_to = None

    def add_options(self):
        self.add_stomp_options()
        self.add_opt('-r', '--report', metavar='broker|queue.name', default='broker',
                     help="What to report, 'broker' or a queue name (default: broker)")
        self.add_opt('-R', '--reply-to', metavar='DESTINATION',
                     help='Destination the broker sends the statistics to ' +
                     '(default: /topic/nagios.statresults.<hostname>)')

    def process_options(self):
        self.no_args()
        self.process_stomp_options()
        self.target = StatisticsTarget.parse(self.get_opt('report'))
        log_option('report', self.target)
        self.reply_to = self.get_opt('reply_to') or default_reply_to()
        log_option('reply to', self.reply_to)

    def handle_error(self, error):
        print('Failed to get stats: {0}'.format(error))
        sys.exit(ERRORS[error.status])

    def run(self):
        with self.stomp_client() as client:
            stats = fetch_statistics(client, self.target, self.reply_to)
        # keys containing + are not valid Cacti field names
        print(' '.join(['{0}:{1}'.format(key, value) for key, value in stats.items() if '+' not in key]))


def main():
    ActiveMQCactiStats().main()


if __name__ == '__main__':
    main()
