#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 15:30:44 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Nagios Plugin to check the size and memory usage of an ActiveMQ queue via the ActiveMQ Statistics Plugin

Connects over STOMP, requests the statistics of the given queue and checks both the number of messages
waiting and the percentage of the queue's memory limit used. Each is checked against its own thresholds
and the worst result is returned, with both values always shown.

    check_activemq_queue.py --host broker1 --queue foo.bar --queue-warn 10 --queue-crit 20

Multiple --host switches may be given for active / passive clusters, they are tried in order.

Requires the ActiveMQ Statistics Plugin to be enabled on the broker:

http://activemq.apache.org/statisticsplugin.html

"""

import sys
import traceback
try:
    # pylint: disable=wrong-import-position
    from monscripts.activemq import default_reply_to, fetch_statistics, StatisticsTarget, TargetKind
    from monscripts.utils import log, log_option, isFloat, to_number, ConfigurationError, ParseError
    from monscripts import StompNagiosPlugin
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.3.0'


class CheckActiveMQQueue(StompNagiosPlugin):

    default_stomp_port = 6163

    def __init__(self):
        super(CheckActiveMQQueue, self).__init__()
        self.timeout_default = 2
        self.queue = None
        self.reply_to = None
        self.error_prefix = 'Failed to get ActiveMQ stats: '

    def add_options(self):
        super(CheckActiveMQQueue, self).add_options()
        self.add_opt('-Q', '--queue', metavar='QUEUE.NAME', help='Queue to monitor')
        self.add_opt('-R', '--reply-to', metavar='DESTINATION',
                     help='Destination the broker sends the statistics to ' +
                     '(default: /topic/nagios.statresults.<hostname>, eg. /temp-topic/... where supported)')
        self.add_thresholds('queue', default_warning=100, default_critical=500, units='for queue size')
        self.add_thresholds('mem', default_warning=50, default_critical=75, units='for % memory used')

    def process_options(self):
        super(CheckActiveMQQueue, self).process_options()
        self.queue = self.get_opt('queue')
        if not self.queue:
            raise ConfigurationError('Please specify a queue name with --queue')
        log_option('queue', self.queue)
        self.reply_to = self.get_opt('reply_to') or default_reply_to()
        log_option('reply to', self.reply_to)
        self.validate_thresholds('queue')
        self.validate_thresholds('mem')

    def get_stat(self, stats, key):
        if key not in stats:
            raise ParseError("'{0}' field not found in statistics returned for queue '{1}'".format(key, self.queue))
        value = stats[key]
        if not isFloat(value, allow_negative=True):
            raise ParseError("non-numeric '{0}' value '{1}' returned for queue '{2}'".format(key, value, self.queue))
        return to_number(value)

    def run(self):
        target = StatisticsTarget(TargetKind.DESTINATION, self.queue)
        with self.stomp_client() as client:
            stats = fetch_statistics(client, target, self.reply_to)
        size = self.get_stat(stats, 'size')
        memory_pct = self.get_stat(stats, 'memoryPercentUsage')
        log.info('queue size = %s, memory used = %s%%', size, memory_pct)
        self.add_metric('size', size, 'queue', minimum=0,
                        message="{0} queue '{1}' has {2} messages".format(self.name, self.queue, size))
        self.add_metric('memory_pct', memory_pct, 'mem', uom='%', minimum=0, maximum=100,
                        message='{0}% memory used'.format(memory_pct))


def main():
    CheckActiveMQQueue().main()


if __name__ == '__main__':
    main()
