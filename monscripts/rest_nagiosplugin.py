#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 13:10:09 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Nagios Plugin base class for checks querying an HTTP(S) endpoint

Subclasses set self.path and implement parse_json() for JSON APIs or parse() for raw text bodies

"""

from requests.auth import HTTPBasicAuth
from monscripts.nagiosplugin import NagiosPlugin
from monscripts.request_handler import RequestHandler
from monscripts.utils import log, log_option, getenvs, CodingError, ParseError
from monscripts.utils import validate_host, validate_port

__version__ = '0.3.0'


# pylint: disable=too-many-instance-attributes
class RestNagiosPlugin(NagiosPlugin):

    def __init__(self):
        super(RestNagiosPlugin, self).__init__()
        self.name = None
        self.default_host = 'localhost'
        self.default_port = 80
        self.default_ssl = False
        self.host = None
        self.port = None
        self.protocol = 'http'
        self.path = '/'
        self.json = True
        self.auth = False
        self.user = None
        self.password = None
        self.headers = None
        self.request_handler = None

    def env_names(self, suffix):
        names = []
        if self.name:
            names.append('{0}_{1}'.format(self.name.upper().replace(' ', '_'), suffix))
        names.append(suffix)
        return names

    def add_options(self):
        self.add_opt('-H', '--host', default=getenvs(*self.env_names('HOST'), default=self.default_host),
                     help='{0} host (${1}, default: {2})'.format(self.name, ', $'.join(self.env_names('HOST')),
                                                                  self.default_host))
        self.add_opt('-P', '--port', default=getenvs(*self.env_names('PORT'), default=self.default_port),
                     help='{0} port (${1}, default: {2})'.format(self.name, ', $'.join(self.env_names('PORT')),
                                                                  self.default_port))
        if self.auth:
            self.add_opt('-u', '--user', default=getenvs(*self.env_names('USER')),
                         help='{0} user (${1})'.format(self.name, ', $'.join(self.env_names('USER'))))
            self.add_opt('-p', '--password', default=getenvs(*self.env_names('PASSWORD')),
                         help='{0} password (${1})'.format(self.name, ', $'.join(self.env_names('PASSWORD'))))
        self.add_opt('-S', '--ssl', dest='ssl', action='store_true', default=self.default_ssl,
                     help='Use SSL (default: {0})'.format('on' if self.default_ssl else 'off'))
        self.add_opt('--no-ssl', dest='ssl', action='store_false', help='Use plain HTTP')
        self.add_opt('--ssl-ca', help='CA certificate to verify the server certificate against')
        self.add_opt('--ssl-cert', help='Client certificate to present')
        self.add_opt('--ssl-key', help='Client certificate private key')
        self.add_opt('--ssl-noverify', action='store_true', help='Do not verify the server certificate')

    def process_options(self):
        self.host = self.get_opt('host')
        self.port = self.get_opt('port')
        validate_host(self.host)
        validate_port(self.port)
        self.port = int(self.port)
        auth = None
        if self.auth:
            self.user = self.get_opt('user')
            self.password = self.get_opt('password')
            log_option('user', self.user)
            if self.user and self.password:
                auth = HTTPBasicAuth(self.user, self.password)
        ssl = self.get_opt('ssl')
        log_option('ssl', ssl)
        if ssl:
            self.protocol = 'https'
        verify = True
        if self.get_opt('ssl_noverify'):
            verify = False
        elif self.get_opt('ssl_ca'):
            verify = self.get_opt('ssl_ca')
        cert = None
        if self.get_opt('ssl_cert'):
            cert = self.get_opt('ssl_cert')
            if self.get_opt('ssl_key'):
                cert = (cert, self.get_opt('ssl_key'))
        log_option('ssl verify', verify)
        log_option('ssl cert', cert)
        self.request_handler = RequestHandler(timeout=self.timeout, auth=auth, verify=verify, cert=cert)

    @property
    def url(self):
        return '{protocol}://{host}:{port}{path}'.format(protocol=self.protocol,
                                                        host=self.host,
                                                        port=self.port,
                                                        path=self.path)

    def query(self):
        log.info('querying %s', self.name)
        return self.request_handler.get(self.url, headers=self.headers)

    def run(self):
        req = self.query()
        if self.json:
            try:
                json_data = req.json()
            except ValueError as _:
                raise ParseError('invalid JSON returned by {0} at {1}: {2}'.format(self.name, self.url, _))
            self.parse_json(json_data)
        else:
            self.parse(req.text)

    def parse_json(self, json_data):
        raise CodingError('parse_json() not implemented in {0}'.format(self.__class__.__name__))

    def parse(self, content):
        raise CodingError('parse() not implemented in {0}'.format(self.__class__.__name__))
