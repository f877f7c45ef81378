#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 13:52:26 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Synchronous request / reply wrapper around the stomp.py STOMP client

Multiple hosts may be given for active / passive broker clusters, they are tried in order
and must all share the same port and credentials

"""

import logging
import queue
import stomp
from stomp.exception import StompException
from monscripts.utils import log, FetchError, FetchTimeout

__version__ = '0.2.0'

VERBOSITIES = ('silent', 'normal', 'debug')


class ReplyListener(stomp.ConnectionListener):

    def __init__(self):
        super(ReplyListener, self).__init__()
        self.messages = queue.Queue()
        self.errors = []

    def on_message(self, frame):
        log.debug('received message, headers: %s', frame.headers)
        self.messages.put(frame.body)

    def on_error(self, frame):
        error = frame.headers.get('message') or frame.body
        log.debug('received error frame: %s', error)
        self.errors.append(error)

    def on_disconnected(self):
        log.debug('disconnected from broker')


class StompClient(object):

    listener_name = 'monscripts'

    def __init__(self, hosts, port, user=None, password=None, timeout=2, verbosity='silent'):
        if verbosity not in VERBOSITIES:
            raise ValueError("invalid verbosity '{0}', must be one of: {1}".format(verbosity, ', '.join(VERBOSITIES)))
        self.hosts = list(hosts)
        self.port = port
        self.user = user
        self.password = password
        self.timeout = timeout
        self.verbosity = verbosity
        self.listener = ReplyListener()
        self.conn = None
        self.subscription_id = 0

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, *args):
        self.disconnect()

    def __str__(self):
        return ', '.join(['{0}:{1}'.format(host, self.port) for host in self.hosts])

    def set_library_verbosity(self):
        stomp_log = logging.getLogger('stomp.py')
        if self.verbosity == 'silent':
            # the library logs connection failures itself, stdout must only carry the status line
            stomp_log.setLevel(logging.CRITICAL + 1)
        elif self.verbosity == 'debug':
            stomp_log.setLevel(logging.DEBUG)
        else:
            stomp_log.setLevel(logging.WARNING)

    def check_errors(self):
        if self.listener.errors:
            raise FetchError('broker {0} returned error: {1}'.format(self, self.listener.errors[-1]))

    def connect(self):
        self.set_library_verbosity()
        log.info('connecting to STOMP broker %s as user %s', self, self.user)
        self.conn = stomp.Connection(host_and_ports=[(host, self.port) for host in self.hosts],
                                     reconnect_attempts_max=1,
                                     timeout=self.timeout)
        self.conn.set_listener(self.listener_name, self.listener)
        try:
            self.conn.connect(self.user, self.password, wait=True)
        except StompException as _:
            # a rejected login arrives as an ERROR frame followed by an empty ConnectFailedException
            reason = self.listener.errors[-1] if self.listener.errors else str(_) or type(_).__name__
            raise FetchError('failed to connect to broker {0}: {1}'.format(self, reason))
        self.check_errors()

    def subscribe(self, destination, headers=None):
        self.subscription_id += 1
        log.debug("subscribing to '%s' with headers %s", destination, headers)
        try:
            self.conn.subscribe(destination, id=self.subscription_id, ack='auto', headers=headers)
        except StompException as _:
            raise FetchError("failed to subscribe to '{0}': {1}".format(destination, _))

    def publish(self, destination, body='', headers=None):
        log.debug("publishing to '%s' with headers %s: '%s'", destination, headers, body)
        try:
            self.conn.send(destination, body, headers=headers)
        except StompException as _:
            raise FetchError("failed to publish to '{0}': {1}".format(destination, _))

    def receive(self, timeout=None):
        if timeout is None:
            timeout = self.timeout
        try:
            body = self.listener.messages.get(timeout=timeout)
        except queue.Empty:
            self.check_errors()
            raise FetchTimeout('no reply received from broker {0} within {1} secs'.format(self, timeout))
        if isinstance(body, bytes):
            body = body.decode('utf-8')
        return body

    def disconnect(self):
        if self.conn is None or not self.conn.is_connected():
            return
        log.debug('disconnecting from broker %s', self)
        try:
            self.conn.disconnect()
        except StompException as _:
            log.debug('error while disconnecting from broker %s: %s', self, _)
