#  vim:ts=4:sts=4:sw=4:et
#
#  Date: 2026-10-19 10:05:32 +0100 (Mon, 19 Oct 2026)
#
#  License: Apache 2.0, see accompanying LICENSE file
#

"""

Library shared by the Nagios / Cacti monitoring scripts

"""

from monscripts.cli import CLI
from monscripts.nagiosplugin import NagiosPlugin
from monscripts.rest_nagiosplugin import RestNagiosPlugin
from monscripts.stomp_nagiosplugin import StompNagiosPlugin, StompOptions
from monscripts.request_handler import RequestHandler
from monscripts.threshold import Direction, Threshold

__version__ = '0.4.0'
