"""
Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

from gnssrelay._version import __version__
from gnssrelay.exceptions import GNSSRelayError, NTRIPSessionError, ParameterError
from gnssrelay.globals import *
from gnssrelay.helpers import *
from gnssrelay.ntripclient import NTRIPClient
from gnssrelay.ntripsession import (
    NTRIPReply,
    NTRIPSession,
    SessionConfig,
    SessionState,
    classify_reply,
    split_reply,
)
from gnssrelay.receiver import HiperReceiver
from gnssrelay.socketwrapper import SocketWrapper, open_socket

version = __version__  # pylint: disable=invalid-name
