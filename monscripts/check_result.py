#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 11:02:17 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Check results - per metric messages and perfdata aggregated into a single Nagios status line

    <LEVEL>: <message>[, <message>...]|<perf1> <perf2> ...

The overall status is the worst status of any metric, but every metric's message is kept
so operators can see all the contributing values.

"""

from monscripts.utils import ERRORS, CodingError, worst_status

__version__ = '0.2.1'


def format_status(status, messages, perfdata=None):
    if status not in ERRORS:
        raise CodingError("invalid status '{0}' passed to format_status()".format(status))
    output = '{0}: {1}'.format(status, ', '.join([_ for _ in messages if _]))
    if perfdata:
        output += '|' + ' '.join(perfdata)
    return output


def format_number(value):
    if isinstance(value, float):
        return '{0:.2f}'.format(value).rstrip('0').rstrip('.')
    return '{0}'.format(value)


class Metric(object):

    def __init__(self, name, value, threshold=None, uom='', minimum=None, maximum=None):
        self.name = name
        self.value = value
        self.threshold = threshold
        self.uom = uom
        self.minimum = minimum
        self.maximum = maximum

    def evaluate(self):
        if self.threshold is None:
            return 'OK'
        return self.threshold.evaluate(self.value)

    def perfdata(self):
        fields = [format_number(self.value) + self.uom]
        if self.threshold is not None:
            fields += [format_number(self.threshold.warning), format_number(self.threshold.critical)]
        else:
            fields += ['', '']
        for _ in (self.minimum, self.maximum):
            fields.append('' if _ is None else format_number(_))
        return '{0}={1}'.format(self.name, ';'.join(fields).rstrip(';'))


class CheckResult(object):

    def __init__(self):
        self.status = None
        self.messages = []
        self.perfdata = []

    def escalate(self, status):
        self.status = worst_status(self.status, status)
        return self.status

    def add(self, message, status='OK'):
        self.messages.append(message)
        return self.escalate(status)

    def add_perfdata(self, token):
        self.perfdata.append(token)

    def add_metric(self, metric, message=None):
        """Evaluates the metric, records its message and perfdata and returns the metric's own status"""
        status = metric.evaluate()
        self.escalate(status)
        if message is not None:
            if metric.threshold is not None:
                message += metric.threshold.breach_msg(status)
            self.messages.append(message)
        self.perfdata.append(metric.perfdata())
        return status

    def fail(self, status, message):
        """Replaces everything gathered so far, used when the fetch itself failed"""
        self.status = status
        self.messages = [message]
        self.perfdata = []

    def output(self, perfdata=True):
        status = self.status or 'UNKNOWN'
        messages = self.messages or ['no result determined']
        return format_status(status, messages, self.perfdata if perfdata else None)

    def exit_code(self):
        return ERRORS[self.status or 'UNKNOWN']
