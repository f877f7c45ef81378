#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 10:40:03 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Warning / Critical threshold evaluation

UPPER thresholds alert when the value grows to the bound (queue depth, memory %, age, failure counts),
LOWER thresholds alert when the value falls to the bound (minimum population counts, time left until expiry)

"""

from enum import Enum
from monscripts.utils import ConfigurationError, log

__version__ = '0.3.0'


class Direction(Enum):
    UPPER = 'upper'
    LOWER = 'lower'


def evaluate(value, warning, critical, direction=Direction.UPPER):
    # critical is always tested first so equal or inverted bounds are applied literally
    if direction is Direction.UPPER:
        if value >= critical:
            return 'CRITICAL'
        if value >= warning:
            return 'WARNING'
        return 'OK'
    elif direction is Direction.LOWER:
        if value <= critical:
            return 'CRITICAL'
        if value < warning:
            return 'WARNING'
        return 'OK'
    raise ValueError("invalid threshold direction '{0}'".format(direction))


class Threshold(object):

    def __init__(self, warning, critical, direction=Direction.UPPER, name=''):
        self.warning = warning
        self.critical = critical
        self.direction = direction
        self.name = name

    def __repr__(self):
        return 'Threshold(name={0!r}, warning={1!r}, critical={2!r}, direction={3})'\
               .format(self.name, self.warning, self.critical, self.direction.value)

    def _label(self):
        if self.name:
            return '{0} '.format(self.name)
        return ''

    def validate_ordering(self):
        """Raises ConfigurationError if warning is more extreme than critical in the alerting direction"""
        if self.direction is Direction.UPPER and self.warning > self.critical:
            raise ConfigurationError('Parameters do not make sense, {0}warning threshold {1} '
                                     .format(self._label(), self.warning) +
                                     'must be <= critical threshold {0}'.format(self.critical))
        if self.direction is Direction.LOWER and self.warning < self.critical:
            raise ConfigurationError('Parameters do not make sense, {0}warning threshold {1} '
                                     .format(self._label(), self.warning) +
                                     'must be >= critical threshold {0}'.format(self.critical))

    def evaluate(self, value):
        status = evaluate(value, self.warning, self.critical, self.direction)
        log.debug('%sthreshold check: value %s, warning %s, critical %s, direction %s => %s',
                  self._label(), value, self.warning, self.critical, self.direction.value, status)
        return status

    def bound(self, status):
        """Returns the bound that was breached for the given status"""
        if status == 'CRITICAL':
            return self.critical
        elif status == 'WARNING':
            return self.warning
        return None

    def breach_msg(self, status):
        bound = self.bound(status)
        if bound is None:
            return ''
        if self.direction is Direction.UPPER:
            operator = '>='
        elif status == 'CRITICAL':
            operator = '<='
        else:
            operator = '<'
        return ' ({0} {1} {2})'.format(status, operator, bound)

    def perfdata(self):
        return ';{0};{1}'.format(self.warning, self.critical)
