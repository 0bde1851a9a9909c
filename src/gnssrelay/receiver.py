"""
receiver.py

Command channel for a Topcon/Javad style GNSS receiver attached over
Bluetooth SPP (e.g. /dev/rfcomm0) or any other serial link.

On opening, the receiver is told to emit NMEA GGA sentences on the
current terminal and to accept RTCM3 corrections on it. Sentences are
read with pynmeagps; correction bytes are written straight back.

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

from logging import getLogger

from pynmeagps import NMEAReader
from serial import Serial

from gnssrelay.globals import (
    DEFAULT_TIMEOUT,
    RECEIVER_BAUDRATE,
    RECEIVER_EOL,
    RECEIVER_INIT,
)


class HiperReceiver:
    """
    GNSS receiver command channel.
    """

    def __init__(
        self,
        port: str = None,
        baudrate: int = RECEIVER_BAUDRATE,
        timeout: float = DEFAULT_TIMEOUT,
        stream: object = None,
        commands: tuple = RECEIVER_INIT,
    ):
        """
        Constructor.

        :param str port: serial port e.g. "/dev/rfcomm0"
        :param int baudrate: baud rate (115200)
        :param float timeout: serial read timeout in seconds (3)
        :param object stream: already open stream with read/readline/write (None)
        :param tuple commands: initialisation commands sent on open
        """

        self.logger = getLogger(__name__)
        self._port = port
        self._baudrate = int(baudrate)
        self._timeout = float(timeout)
        self._stream = stream
        self._commands = commands
        self._reader = None

    def __enter__(self):
        """
        Context manager enter routine.
        """

        self.open()
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        """
        Context manager exit routine.
        """

        self.close()

    def open(self):
        """
        Open serial link (if not provided) and initialise receiver.

        :raises: SerialException if port cannot be opened
        """

        if self._stream is None:
            self._stream = Serial(self._port, self._baudrate, timeout=self._timeout)
            self.logger.info(f"Opened receiver on {self._port} @ {self._baudrate}")
        self._reader = NMEAReader(self._stream)
        self.send_commands(self._commands)

    def send_command(self, command: str):
        """
        Send a single text command to receiver.

        :param str command: command e.g. "list,/dev"
        """

        self._stream.write(f"{command}{RECEIVER_EOL}".encode("ascii"))
        self.logger.debug(f"Command sent: {command}")

    def send_commands(self, commands: tuple):
        """
        Send a sequence of commands and flush.

        :param tuple commands: commands
        """

        for command in commands:
            self.send_command(command)
        self._stream.flush()

    def read_sentence(self) -> tuple:
        """
        Read next NMEA sentence from receiver.

        :return: tuple of (raw bytes, NMEAMessage), (None, None) if none available
        :rtype: tuple
        """

        return self._reader.read()

    def push_corrections(self, data: bytes, length: int = None):
        """
        Write correction data to receiver. Usable as an NTRIPClient data sink.

        :param bytes data: correction data
        :param int length: number of bytes of data to write (all)
        """

        if length is not None:
            data = data[:length]
        self._stream.write(data)
        self.logger.debug(f"Pushed {len(data)} bytes to receiver")

    def close(self):
        """
        Close serial link.
        """

        if self._stream is not None:
            self._stream.close()
            self._stream = None
            self._reader = None
            self.logger.info("Receiver closed")

    @property
    def is_open(self) -> bool:
        """
        Link status getter.

        :return: True if open
        :rtype: bool
        """

        return self._stream is not None
