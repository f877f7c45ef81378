#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 14:58:12 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

STOMP connection options shared by the ActiveMQ checks and the Cacti statistics script

"""

from monscripts.nagiosplugin import NagiosPlugin
from monscripts.stomp_client import StompClient
from monscripts.utils import log_option, getenvs, read_password, ConfigurationError
from monscripts.utils import validate_host, validate_port

__version__ = '0.2.0'


class StompOptions(object):
    """Mixin for CLI subclasses talking to a STOMP broker"""

    default_stomp_port = 61613
    default_stomp_user = 'nagios'
    client_class = StompClient

    def add_stomp_options(self):
        self.add_opt('-H', '--host', action='append', dest='hosts',
                     help='Broker host to connect to, may be given multiple times for active / passive ' +
                     'clusters sharing the same port and credentials ($STOMP_HOST, comma separated)')
        self.add_opt('-P', '--port', default=getenvs('STOMP_PORT', default=self.default_stomp_port),
                     help='Broker port ($STOMP_PORT, default: {0})'.format(self.default_stomp_port))
        self.add_opt('-u', '--user', default=getenvs('STOMP_USER', default=self.default_stomp_user),
                     help='User to connect as ($STOMP_USER, default: {0})'.format(self.default_stomp_user))
        self.add_opt('-p', '--password', default=getenvs('STOMP_PASSWORD'),
                     help='Password to connect with, or the path to a file holding it on its first line ' +
                     '($STOMP_PASSWORD)')

    def process_stomp_options(self):
        # pylint: disable=attribute-defined-outside-init
        self.hosts = self.get_opt('hosts')
        if not self.hosts and getenvs('STOMP_HOST'):
            self.hosts = [_.strip() for _ in getenvs('STOMP_HOST').split(',') if _.strip()]
        if not self.hosts:
            raise ConfigurationError('No host to monitor supplied, please specify --host')
        for host in self.hosts:
            validate_host(host)
        port = self.get_opt('port')
        validate_port(port)
        self.port = int(port)
        self.user = self.get_opt('user')
        log_option('user', self.user)
        self.password = read_password(self.get_opt('password'))

    def stomp_client(self):
        verbosity = 'silent'
        if self.verbose >= 3:
            verbosity = 'debug'
        return self.client_class(self.hosts, self.port, user=self.user, password=self.password,
                                 timeout=self.timeout, verbosity=verbosity)


class StompNagiosPlugin(StompOptions, NagiosPlugin):

    def __init__(self):
        super(StompNagiosPlugin, self).__init__()
        self.name = 'ActiveMQ'
        self.hosts = None
        self.port = None
        self.user = None
        self.password = None

    def add_options(self):
        self.add_stomp_options()

    def process_options(self):
        self.process_stomp_options()
