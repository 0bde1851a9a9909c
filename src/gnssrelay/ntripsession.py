"""
ntripsession.py

NTRIP 1.0 session class; owns a single TCP connection to an NTRIP
caster, sends the GET request for the configured mountpoint,
classifies the caster's first reply and, once authenticated, relays
the RTCM correction stream to a sink callback while periodically
reporting the rover position back to the caster.

All streaming runs in one background (daemon) thread which polls the
connection for available data at a fixed interval, so the same loop
can interleave outbound position reports with inbound corrections.

NB: the request declares 'Connection: close' but the socket is kept
open for the life of the session. Existing casters rely on this.

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

import re
from base64 import b64encode
from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from threading import Event, Lock, Thread, current_thread
from typing import Callable, Optional

from gnssrelay._version import __version__ as VERSION
from gnssrelay.globals import (
    DEFAULT_BUFSIZE,
    DEFAULT_TIMEOUT,
    ERR_AUTH,
    ERR_CLOSED,
    ERR_MOUNTPOINT,
    ERR_UNEXPECTED,
    GGA_TICKS,
    POLL_DELAY,
    STATUS_IO_ERROR,
    STATUS_OK,
    STATUS_REJECTED,
    STATUS_SETUP_FAILED,
    STATUS_UNAUTHORIZED,
    USER_AGENT,
)
from gnssrelay.socketwrapper import open_socket


class NTRIPReply(Enum):
    """
    Classification of the caster's first reply.
    """

    ICY_200_OK = 0
    HTTP_401_UNAUTHORIZED = 1
    SOURCETABLE_200 = 2
    UNEXPECTED = 3


REPLY_PATTERNS = (
    (re.compile(r"^ICY 200", re.IGNORECASE), NTRIPReply.ICY_200_OK),
    (re.compile(r"^HTTP/1\.\d 401", re.IGNORECASE), NTRIPReply.HTTP_401_UNAUTHORIZED),
    (re.compile(r"^SOURCETABLE 200", re.IGNORECASE), NTRIPReply.SOURCETABLE_200),
)
"""Reply prefix patterns, checked in order"""

REPLY_STATUS = {
    NTRIPReply.ICY_200_OK: (STATUS_OK, ""),
    NTRIPReply.HTTP_401_UNAUTHORIZED: (STATUS_UNAUTHORIZED, ERR_AUTH),
    NTRIPReply.SOURCETABLE_200: (STATUS_REJECTED, ERR_MOUNTPOINT),
    NTRIPReply.UNEXPECTED: (STATUS_REJECTED, ERR_UNEXPECTED),
}
"""Session status and error text for each reply type"""

HEADER_FIELD = re.compile(rb"^[A-Za-z0-9-]+(:|$)")
"""Start of a (possibly partial) header field line"""


def classify_reply(data: bytes) -> NTRIPReply:
    """
    Classify the caster's first reply chunk.

    :param bytes data: first non-empty read from socket
    :return: reply type
    :rtype: NTRIPReply
    """

    content = data.decode("utf-8", errors="replace")
    for pattern, reply in REPLY_PATTERNS:
        if pattern.match(content):
            return reply
    return NTRIPReply.UNEXPECTED


def split_reply(data: bytes) -> Optional[bytes]:
    """
    Strip the reply header, returning any data which follows it.

    :param bytes data: reply received so far
    :return: body bytes (may be empty), or None if header is incomplete
    :rtype: bytes or None
    """

    hdrbdy = data.split(b"\r\n\r\n", 1)
    if len(hdrbdy) > 1:
        return hdrbdy[1]
    # some poorly implemented ICY responses only have
    # a single "\r\n" between response header and body
    if hdrbdy[0][:12].upper() == b"ICY 200 OK\r\n":
        body = hdrbdy[0][12:]
        if HEADER_FIELD.match(body) is None:
            return body
    return None


@dataclass(frozen=True)
class SessionConfig:
    """
    Immutable NTRIP session configuration.
    """

    server: str
    port: int
    mountpoint: str
    ntripuser: str
    ntrippassword: str
    datasink: Optional[Callable[[bytes, int], None]] = None


class SessionState:
    """
    Mutable NTRIP session state.

    `status`, `lasterror` and `bytes_relayed` are written by the worker
    thread (or by the setup step on the caller's thread);
    `latest_position` is written only by the caller.
    """

    def __init__(self):
        """
        Constructor.
        """

        self.status = STATUS_OK
        self.lasterror = ""
        self.latest_position = None
        self.bytes_relayed = 0

    def reset(self):
        """
        Clear error status. Position and byte count are retained.
        """

        self.lasterror = ""
        self.status = STATUS_OK


class NTRIPSession:
    """
    NTRIP session class.
    """

    def __init__(
        self,
        config: SessionConfig,
        state: SessionState,
        connector: Callable = open_socket,
        **kwargs,
    ):
        """
        Constructor.

        :param SessionConfig config: session configuration
        :param SessionState state: shared session state
        :param Callable connector: function (server, port, timeout) returning
            a connected stream with in_waiting, read(), write() and close()
        :param float timeout: (kwarg) socket timeout in seconds (3)
        :param float polldelay: (kwarg) delay between data polls in seconds (0.5)
        :param int ggaticks: (kwarg) polls between position reports (30)
        :param int bufsize: (kwarg) maximum bytes per read (1024)
        """

        # configure logger with name "gnssrelay" in calling module
        self.logger = getLogger(__name__)
        self._config = config
        self._state = state
        self._connector = connector
        self._timeout = float(kwargs.get("timeout", DEFAULT_TIMEOUT))
        self._polldelay = float(kwargs.get("polldelay", POLL_DELAY))
        self._ggaticks = int(kwargs.get("ggaticks", GGA_TICKS))
        self._bufsize = int(kwargs.get("bufsize", DEFAULT_BUFSIZE))
        self._stream = None
        self._lock = Lock()
        self._stopevent = Event()
        self._ntrip_thread = None

    def _set_request(self) -> str:
        """
        Construct NTRIP 1.0 GET request.

        :return: request as string
        :rtype: str
        """

        cfg = self._config
        cred = b64encode(f"{cfg.ntripuser}:{cfg.ntrippassword}".encode()).decode()
        return (
            f"GET /{cfg.mountpoint} HTTP/1.0\r\n"
            f"User-Agent: {USER_AGENT}/{VERSION}\r\n"
            "Accept: */*\r\n"
            "Connection: close\r\n"
            f"Authorization: Basic {cred}\r\n"
            "\r\n"
        )

    def connect(self) -> bool:
        """
        Open connection to caster and send request, unless a
        connection already exists.

        On failure, status is set to -2 and the session is left
        unconnected.

        :return: True if a new connection was opened
        :rtype: bool
        """

        if self._stream is not None:
            return False

        cfg = self._config
        request = self._set_request()
        self.logger.debug(f"Request headers:\n{request}")
        try:
            stream = self._connector(cfg.server, cfg.port, self._timeout)
        except OSError as err:
            self.fail(STATUS_SETUP_FAILED, f"Failed to set up NTRIP request - {err}")
            return False
        self._stream = stream
        try:
            stream.write(request.encode())
        except OSError as err:
            self.fail(STATUS_SETUP_FAILED, f"Failed to set up NTRIP request - {err}")
            return False

        self.logger.info(f"Connected to {cfg.server}:{cfg.port}/{cfg.mountpoint}")
        return True

    def send_position(self):
        """
        Send latest position sentence to caster.

        :raises: OSError if write fails
        """

        stream = self._stream
        if stream is not None:
            self._send(stream)

    def start(self):
        """
        Start the NTRIP reader thread, unless already running.
        """

        if self.running or self._stream is None:
            return

        # each thread gets its own stop event, so an abandoned
        # thread can never be revived by a later start
        self._stopevent = Event()
        self._ntrip_thread = Thread(
            target=self._read_thread,
            args=(
                self._stream,
                self._stopevent,
            ),
            daemon=True,
        )
        self._ntrip_thread.start()

    def stop(self, timeout: float = None):
        """
        Stop the NTRIP reader thread and close the connection.

        If the thread does not stop within the timeout, the connection
        is closed regardless and the thread abandoned; any write in
        progress is lost.

        :param float timeout: seconds to wait for thread (None = indefinitely)
        """

        thread, stream = self.halt()
        self.await_stop(thread, stream, timeout)

    def halt(self) -> tuple:
        """
        Signal the reader thread to stop and detach it and its
        connection from the session, without waiting.

        A subsequent connect() opens a fresh connection.

        :return: tuple of (thread or None, stream or None)
        :rtype: tuple
        """

        thread = self._ntrip_thread
        if thread is not None:
            self._stopevent.set()
            self._ntrip_thread = None
        with self._lock:
            stream = self._stream
            self._stream = None
        return thread, stream

    def await_stop(self, thread: Thread, stream: object, timeout: float = None):
        """
        Wait for a halted reader thread to exit, then close its connection.

        :param Thread thread: halted thread (may be None)
        :param object stream: detached stream (may be None)
        :param float timeout: seconds to wait for thread (None = indefinitely)
        """

        if thread is not None:
            if thread is not current_thread():
                thread.join(timeout)
            if thread.is_alive():
                self.logger.warning(
                    f"NTRIP thread failed to stop within {timeout} seconds"
                    " - closing connection"
                )
        if stream is not None:
            stream.close()
            self.logger.info("Disconnected")

    def fail(self, status: int, msg: str, stream: object = None):
        """
        Record fatal error and close connection.

        :param int status: session status code
        :param str msg: error text
        :param object stream: stream to close (current connection)
        """

        self._state.lasterror = msg
        self._state.status = status
        self.logger.error(msg)
        stream = self._stream if stream is None else stream
        if stream is not None:
            self._release(stream)

    def _release(self, stream: object):
        """
        Close stream, detaching it from the session if it is still current.

        :param object stream: stream to close
        """

        with self._lock:
            if self._stream is stream:
                self._stream = None
        stream.close()

    def _read_thread(self, stream: object, stopevent: Event):
        """
        THREADED
        Await caster reply and, if authenticated, relay correction data
        until stopped or a fatal error occurs.

        :param object stream: connected stream
        :param Event stopevent: stop event
        """

        errmsg = "Failed to get response"
        try:
            reply = self._await_reply(stream, stopevent)
            if reply is not None:
                body = self._handle_reply(reply, stream, stopevent)
                if body is not None:
                    errmsg = "Response loop failed"
                    if len(body) > 0:
                        self._relay(body)
                    self._stream_data(stream, stopevent)
        except Exception as err:  # pylint: disable=broad-exception-caught
            if stopevent.is_set():
                self.logger.debug(f"{errmsg} after stop requested - {err}")
            else:
                self.fail(STATUS_IO_ERROR, f"{errmsg} - {err}", stream)
        finally:
            self._release(stream)
            self.logger.debug("NTRIP thread terminated")

    def _await_reply(self, stream: object, stopevent: Event) -> Optional[bytes]:
        """
        Poll for the next chunk of the caster's reply.

        :param object stream: connected stream
        :param Event stopevent: stop event
        :return: next non-empty read, or None if stopped
        :rtype: bytes or None
        """

        while not stopevent.is_set():
            waiting = stream.in_waiting
            if waiting > 0:
                data = stream.read(min(waiting, self._bufsize))
                if len(data) > 0:
                    return data
            stopevent.wait(self._polldelay)
        return None

    def _handle_reply(
        self, reply: bytes, stream: object, stopevent: Event
    ) -> Optional[bytes]:
        """
        Act on the caster's first reply, reading the rest of the
        response header if it spans more than one read.

        :param bytes reply: first reply chunk
        :param object stream: connected stream
        :param Event stopevent: stop event
        :return: any correction data following the header, or None if
            fatal or stopped
        :rtype: bytes or None
        """

        kind = classify_reply(reply)
        self.logger.debug(f"Reply {kind.name}: {reply[:64]}")
        status, msg = REPLY_STATUS[kind]
        if status != STATUS_OK:
            self.fail(status, msg, stream)
            return None

        body = split_reply(reply)
        while body is None:
            more = self._await_reply(stream, stopevent)
            if more is None:
                return None
            reply += more
            body = split_reply(reply)

        cfg = self._config
        self.logger.info(
            f"Streaming RTCM data from {cfg.server}:{cfg.port}/{cfg.mountpoint} ..."
        )
        return body

    def _stream_data(self, stream: object, stopevent: Event):
        """
        Relay available correction data, sending the latest position
        every `ggaticks` polls.

        :param object stream: connected stream
        :param Event stopevent: stop event
        :raises: OSError on transport failure or disconnection
        """

        count = 0
        while not stopevent.is_set():
            if count <= 0:
                self._send(stream)
                count = self._ggaticks
            count -= 1
            waiting = stream.in_waiting
            while waiting > 0 and not stopevent.is_set():
                data = stream.read(min(waiting, self._bufsize))
                if len(data) == 0:
                    raise ConnectionAbortedError(ERR_CLOSED)
                self._relay(data)
                waiting = stream.in_waiting
            stopevent.wait(self._polldelay)

    def _send(self, stream: object):
        """
        Send latest position on the worker's own stream.

        :param object stream: connected stream
        """

        pos = self._state.latest_position
        if pos is not None:
            stream.write(f"{pos}\r\n".encode("ascii", errors="replace"))
            self.logger.debug(f"Position sent: {pos}")

    def _relay(self, data: bytes):
        """
        Forward correction data to sink.

        :param bytes data: correction data
        """

        if self._config.datasink is not None:
            self._config.datasink(data, len(data))
        # count only once delivered
        self._state.bytes_relayed += len(data)
        self.logger.debug(f"Relayed {len(data)} bytes")

    @property
    def connected(self) -> bool:
        """
        Connection status getter.

        :return: True if connection is open
        :rtype: bool
        """

        return self._stream is not None

    @property
    def running(self) -> bool:
        """
        Reader thread status getter.

        :return: True if reader thread is alive
        :rtype: bool
        """

        return self._ntrip_thread is not None and self._ntrip_thread.is_alive()

    @property
    def config(self) -> SessionConfig:
        """
        Getter for session configuration.

        :return: config
        :rtype: SessionConfig
        """

        return self._config
