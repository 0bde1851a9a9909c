"""
socketwrapper.py

Socket stream wrapper providing a serial-like in_waiting, read(n),
write() and close() surface over a connected TCP socket, so the
NTRIP session can poll for available data without blocking.

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

import socket
from logging import getLogger
from select import select

from gnssrelay.globals import DEFAULT_BUFSIZE, DEFAULT_TIMEOUT, ERR_CLOSED


class SocketWrapper:
    """
    Socket stream wrapper.
    """

    def __init__(self, sock: socket.socket, bufsize: int = DEFAULT_BUFSIZE):
        """
        Constructor.

        :param socket sock: connected socket object
        :param int bufsize: maximum bytes reported by in_waiting
        """

        # configure logger with name "gnssrelay" in calling module
        self.logger = getLogger(__name__)
        self._socket = sock
        self._bufsize = bufsize

    @property
    def in_waiting(self) -> int:
        """
        Number of bytes which can be read without blocking (capped at bufsize).

        :return: bytes available, 0 if none
        :rtype: int
        :raises: ConnectionAbortedError if peer has closed the connection
        """

        readable, _, _ = select([self._socket], [], [], 0)
        if not readable:
            return 0
        data = self._socket.recv(self._bufsize, socket.MSG_PEEK)
        if len(data) == 0:
            raise ConnectionAbortedError(ERR_CLOSED)
        return len(data)

    def read(self, num: int) -> bytes:
        """
        Read up to num bytes from socket.
        NB: always check length of return data.

        :param int num: number of bytes to read
        :return: bytes read (which may be less than num)
        :rtype: bytes
        """

        return self._socket.recv(num)

    def write(self, data: bytes) -> int:
        """
        Write bytes to socket.

        :param bytes data: data
        :return: number of bytes written
        :rtype: int
        """

        self._socket.sendall(data)
        return len(data)

    def close(self):
        """
        Close socket.
        """

        try:
            self._socket.shutdown(socket.SHUT_RDWR)
        except OSError:  # already disconnected
            pass
        self._socket.close()


def open_socket(
    server: str, port: int, timeout: float = DEFAULT_TIMEOUT
) -> SocketWrapper:
    """
    Open TCP connection to server and wrap it.

    :param str server: hostname or IP address
    :param int port: port
    :param float timeout: connect/IO timeout in seconds
    :return: wrapped socket
    :rtype: SocketWrapper
    :raises: OSError if connection fails
    """

    sock = socket.create_connection((server, port), timeout)
    return SocketWrapper(sock)
