"""
ntripclient.py

NTRIP client class; the object an application holds to relay RTCM
correction data from an NTRIP caster to a rover receiver.

Wraps a single NTRIPSession. The first position update opens the
connection, sends the request and the position, and starts the
session's reader thread; subsequent updates simply replace the
latest position, which the reader thread reports to the caster at
its own cadence (last writer wins, no queuing).

Any non-zero status is terminal for the connection. Recovery is the
caller's responsibility, via restart() or a new client.

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

from logging import getLogger
from os import getenv
from threading import Lock
from typing import Callable

from gnssrelay.exceptions import NTRIPSessionError, ParameterError
from gnssrelay.globals import (
    ENV_NTRIP_PASSWORD,
    ENV_NTRIP_USER,
    MAXPORT,
    OUTPORT_NTRIP,
    STATUS_OK,
    STATUS_SETUP_FAILED,
    THREAD_STOP_TIMEOUT,
)
from gnssrelay.helpers import format_gga
from gnssrelay.ntripsession import NTRIPSession, SessionConfig, SessionState


class NTRIPClient:
    """
    NTRIP client class.
    """

    def __init__(
        self,
        server: str,
        port: int = OUTPORT_NTRIP,
        mountpoint: str = "",
        ntripuser: str = None,
        ntrippassword: str = None,
        datasink: Callable[[bytes, int], None] = None,
        **kwargs,
    ):
        """
        Constructor.

        User login credentials can be obtained from environment variables
        GNSSRELAY_USER and GNSSRELAY_PASSWORD, or passed as arguments.

        :param str server: NTRIP caster hostname or IP address
        :param int port: NTRIP caster port (2101)
        :param str mountpoint: NTRIP mountpoint
        :param str ntripuser: NTRIP authentication user ("anon")
        :param str ntrippassword: NTRIP authentication password ("password")
        :param Callable datasink: callback(data, length) receiving correction data
        :param float stoptimeout: (kwarg) seconds to wait for reader thread to stop (1.0)
        :param Callable connector: (kwarg) stream factory (see NTRIPSession)
        :param float timeout: (kwarg) socket timeout in seconds (3)
        :param float polldelay: (kwarg) delay between data polls in seconds (0.5)
        :param int ggaticks: (kwarg) polls between position reports (30)
        :param int bufsize: (kwarg) maximum bytes per read (1024)
        :raises: ParameterError if parameters are invalid
        """

        # configure logger with name "gnssrelay" in calling module
        self.logger = getLogger(__name__)

        try:
            if server is None or str(server).strip() == "":
                raise ParameterError(f"Invalid server URL {server}")
            port = int(port)
            if not 0 < port <= MAXPORT:
                raise ParameterError(f"Invalid port {port}")
            if datasink is not None and not callable(datasink):
                raise ParameterError(f"Invalid data sink {datasink}")
            self._stoptimeout = float(kwargs.pop("stoptimeout", THREAD_STOP_TIMEOUT))
            self._config = SessionConfig(
                server=str(server).strip(),
                port=port,
                mountpoint=str(mountpoint),
                ntripuser=(
                    getenv(ENV_NTRIP_USER, "anon") if ntripuser is None else ntripuser
                ),
                ntrippassword=(
                    getenv(ENV_NTRIP_PASSWORD, "password")
                    if ntrippassword is None
                    else ntrippassword
                ),
                datasink=datasink,
            )
            self._state = SessionState()
            self._session = NTRIPSession(self._config, self._state, **kwargs)
        except (ParameterError, ValueError, TypeError) as err:
            raise ParameterError(f"Invalid input arguments - {err}") from err

        self._lock = Lock()

    def __enter__(self):
        """
        Context manager enter routine.
        """

        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        """
        Context manager exit routine.

        Terminates reader thread in an orderly fashion.
        """

        self.stop()

    def update_position(self, sentence: object):
        """
        Update the rover's position.

        The sentence always replaces the latest position. If the session
        is healthy, this also ensures the caster connection is open (sending
        the position straight away if the connection is new) and that the
        reader thread is running.

        :param object sentence: NMEA position sentence as str or bytes
        """

        if isinstance(sentence, (bytes, bytearray)):
            sentence = sentence.decode("ascii", errors="replace")
        with self._lock:
            self._state.latest_position = sentence.strip()
            if self._state.status != STATUS_OK:
                return

            if self._session.connect():
                try:
                    self._session.send_position()
                except OSError as err:
                    self._session.fail(
                        STATUS_SETUP_FAILED, f"Failed to send position - {err}"
                    )
            if self._state.status != STATUS_OK:
                return
            self._session.start()

    def update_coordinates(self, lat: float, lon: float, alt: float):
        """
        Update the rover's position from coordinates, via a
        synthetic GGA sentence.

        :param float lat: latitude in decimal degrees
        :param float lon: longitude in decimal degrees
        :param float alt: altitude in metres
        """

        self.update_position(format_gga(lat, lon, alt))

    def stop(self):
        """
        Stop reader thread and close caster connection.

        Safe to call repeatedly, or when nothing is running. The reader
        thread is awaited outside the client lock.
        """

        with self._lock:
            thread, stream = self._session.halt()
        self._session.await_stop(thread, stream, self._stoptimeout)

    def restart(self):
        """
        Stop, clear any error status and, if a position is known,
        reconnect with it.
        """

        self.stop()
        with self._lock:
            self._state.reset()
        if self._state.latest_position is not None:
            self.update_position(self._state.latest_position)

    def raise_for_status(self):
        """
        Raise exception if session has failed.

        :raises: NTRIPSessionError if status is non-zero
        """

        if self._state.status != STATUS_OK:
            raise NTRIPSessionError(self._state.status, self._state.lasterror)

    @property
    def status(self) -> int:
        """
        Session status getter (0 = healthy).

        :return: status code
        :rtype: int
        """

        return self._state.status

    @property
    def lasterror(self) -> str:
        """
        Error text describing why status is non-zero.

        :return: error text
        :rtype: str
        """

        return self._state.lasterror

    @property
    def latest_position(self) -> str:
        """
        Latest position sentence getter.

        :return: sentence
        :rtype: str
        """

        return self._state.latest_position

    @property
    def bytes_relayed(self) -> int:
        """
        Total correction bytes delivered to the data sink.

        :return: byte count
        :rtype: int
        """

        return self._state.bytes_relayed

    @property
    def running(self) -> bool:
        """
        Reader thread status getter.

        :return: True if reader thread is alive
        :rtype: bool
        """

        return self._session.running

    @property
    def connected(self) -> bool:
        """
        Connection status getter.

        :return: True if caster connection is open
        :rtype: bool
        """

        return self._session.connected

    @property
    def config(self) -> SessionConfig:
        """
        Getter for session configuration.

        :return: config
        :rtype: SessionConfig
        """

        return self._config
