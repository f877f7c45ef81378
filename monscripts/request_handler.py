#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 12:48:30 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Thin wrapper around requests turning transport problems into FetchError / FetchTimeout

"""

import requests
from monscripts.utils import log, FetchError, FetchTimeout

__version__ = '0.3.0'


class RequestHandler(object):

    def __init__(self, timeout=10, auth=None, verify=True, cert=None):
        self.timeout = timeout
        self.auth = auth
        self.verify = verify
        self.cert = cert

    @staticmethod
    def errhint(error, url):
        error = str(error)
        if 'BadStatusLine' in error:
            return ' (possibly connecting to an SSL secured port without using --ssl?)'
        elif url.startswith('https') and ('unknown protocol' in error or 'WRONG_VERSION_NUMBER' in error):
            return ' (possibly connecting to a plain HTTP port with --ssl enabled?)'
        return ''

    @staticmethod
    def check_response_code(req):
        if req.status_code != 200:
            raise FetchError('failed to retrieve {url}: {code} {reason}'
                             .format(url=req.url, code=req.status_code, reason=req.reason))

    def get(self, url, params=None, headers=None):
        log.debug('GET %s', url)
        try:
            req = requests.get(url,
                               params=params,
                               headers=headers,
                               auth=self.auth,
                               verify=self.verify,
                               cert=self.cert,
                               timeout=self.timeout)
        except requests.exceptions.Timeout as _:
            raise FetchTimeout('timed out after {0} secs retrieving {1}: {2}'.format(self.timeout, url, _))
        except requests.exceptions.RequestException as _:
            raise FetchError('{0}{1}'.format(_, self.errhint(_, url)))
        log.debug('response: %s %s', req.status_code, req.reason)
        log.debug('content:\n%s\n%s\n%s', '=' * 80, req.text.strip(), '=' * 80)
        self.check_response_code(req)
        return req
