#!/usr/bin/env python3
#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 19:05:47 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Cacti data input script to fetch JVM memory and connector thread stats from the Tomcat manager status page

Output is space separated key:value pairs, eg.

    memory_free:1234 memory_total:5678 memory_max:9012 maxThreads:200 currentThreadCount:10 currentThreadsBusy:2

"""

import logging
import sys
import traceback
try:
    from bs4 import BeautifulSoup
    from requests.auth import HTTPBasicAuth
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)
try:
    # pylint: disable=wrong-import-position
    from monscripts.utils import log, log_option, ParseError
    from monscripts import CLI, RequestHandler
except ImportError:
    print(traceback.format_exc(), end='')
    sys.exit(3)

__version__ = '0.2.0'


def parse_status(content, connector):
    soup = BeautifulSoup(content, 'xml')
    if log.isEnabledFor(logging.DEBUG):
        log.debug('BeautifulSoup prettified:\n%s\n%s', soup.prettify(), '=' * 80)
    jvm = soup.find('jvm')
    memory = jvm.find('memory') if jvm else None
    if memory is None:
        raise ParseError('jvm memory element not found in Tomcat status')
    stats = ['memory_{0}:{1}'.format(key, value) for key, value in memory.attrs.items()]
    # newer Tomcats quote connector names, eg. "http-nio-8080"
    matches = [_ for _ in soup.find_all('connector') if _.get('name', '').strip('"') == connector.strip('"')]
    if not matches:
        raise ParseError("connector '{0}' not found in Tomcat status".format(connector))
    thread_info = matches[0].find('threadInfo')
    if thread_info is None:
        raise ParseError("threadInfo element not found for connector '{0}' in Tomcat status".format(connector))
    stats += ['{0}:{1}'.format(key, value) for key, value in thread_info.attrs.items()]
    return stats


class QueryTomcatStatistics(CLI):

    def __init__(self):
        super(QueryTomcatStatistics, self).__init__()
        self.url = None
        self.connector = None
        self.request_handler = None

    def add_options(self):
        self.add_opt('-u', '--user', help='User to connect as')
        self.add_opt('-p', '--password', help='Password to connect with')
        self.add_opt('-U', '--url', default='http://localhost/manager/status/',
                     help='Tomcat manager status URL (default: http://localhost/manager/status/)')
        self.add_opt('--connector', default='http-8080', help='Connector to report on (default: http-8080)')

    def process_options(self):
        self.no_args()
        self.url = self.get_opt('url')
        log_option('url', self.url)
        self.connector = self.get_opt('connector')
        log_option('connector', self.connector)
        user = self.get_opt('user')
        password = self.get_opt('password')
        log_option('user', user)
        auth = None
        if user and password:
            auth = HTTPBasicAuth(user, password)
        self.request_handler = RequestHandler(timeout=self.timeout, auth=auth)

    def run(self):
        req = self.request_handler.get(self.url, params={'XML': 'true'})
        print(' '.join(parse_status(req.content, self.connector)))


def main():
    QueryTomcatStatistics().main()


if __name__ == '__main__':
    main()
