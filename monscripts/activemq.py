#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 14:20:51 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

ActiveMQ Statistics Plugin support

Publishing an empty message to ActiveMQ.Statistics.Broker or ActiveMQ.Statistics.Destination.<name>
with a reply-to header returns a map message of statistics. Subscribing with the jms-map-xml
transformation header gets it back encoded as XML:

    <map>
      <entry>
        <string>size</string>
        <long>12</long>
      </entry>
      ...
    </map>

See http://activemq.apache.org/statisticsplugin.html

"""

from enum import Enum
import socket
from bs4 import BeautifulSoup
from monscripts.utils import log, ParseError

__version__ = '0.2.0'

STATISTICS_PREFIX = '/queue/ActiveMQ.Statistics'

TYPES = {
    'string': str,
    'int': int,
    'long': int,
    'double': float,
}


def default_reply_to():
    return '/topic/nagios.statresults.{0}'.format(socket.gethostname())


def check_type(element):
    if element.name not in TYPES:
        raise ParseError("unknown data type '{0}' in statistics map".format(element.name))


def decode_value(element):
    check_type(element)
    converter = TYPES[element.name]
    text = element.text.strip()
    try:
        return converter(text)
    except ValueError:
        raise ParseError("failed to decode {0} value '{1}' in statistics map".format(element.name, text))


def decode_stats_map(content):
    """Decodes a jms-map-xml encoded map message into a dict of typed values"""
    soup = BeautifulSoup(content, 'xml')
    root = soup.find()
    if root is None:
        raise ParseError("no statistics map found in reply '{0}'".format(content))
    stats = {}
    for entry in root.find_all(recursive=False):
        name = None
        for element in entry.find_all(recursive=False):
            # every element, key and empty ones included, must carry a known type
            check_type(element)
            if not element.text.strip():
                continue
            # the first element of each entry is the key, the following one the typed value
            if name is None:
                name = element.text.strip()
                continue
            stats[name] = decode_value(element)
    log.debug('decoded statistics: %s', stats)
    return stats


class TargetKind(Enum):
    BROKER = 'broker'
    DESTINATION = 'destination'


class StatisticsTarget(object):

    def __init__(self, kind, name=None):
        if kind is TargetKind.DESTINATION and not name:
            raise ValueError('destination statistics target requires a destination name')
        self.kind = kind
        self.name = name

    @classmethod
    def parse(cls, report):
        """'broker' selects the broker statistics, anything else is taken as a destination name"""
        if report == 'broker':
            return cls(TargetKind.BROKER)
        return cls(TargetKind.DESTINATION, report)

    def __str__(self):
        if self.kind is TargetKind.BROKER:
            return 'broker'
        return self.name

    @property
    def request_destination(self):
        if self.kind is TargetKind.BROKER:
            return '{0}.Broker'.format(STATISTICS_PREFIX)
        return '{0}.Destination.{1}'.format(STATISTICS_PREFIX, self.name)


def fetch_statistics(client, target, reply_to=None):
    """Requests statistics for the target over a connected StompClient and returns the decoded map"""
    if reply_to is None:
        reply_to = default_reply_to()
    client.subscribe(reply_to, headers={'transformation': 'jms-map-xml'})
    client.publish(target.request_destination, '', headers={'reply-to': reply_to})
    return decode_stats_map(client.receive())
