"""
Global variables for gnssrelay.

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

DEFAULT_BUFSIZE = 1024
"""Maximum bytes taken from the NTRIP socket per read"""
DEFAULT_TIMEOUT = 3
"""Socket connect/IO timeout in seconds"""
POLL_DELAY = 0.5
"""Delay in seconds between polls for inbound data"""
GGA_TICKS = 30
"""Poll iterations between periodic position reports"""
THREAD_STOP_TIMEOUT = 1.0
"""Grace period in seconds for the worker thread to stop"""
MAXPORT = 65535
"""Maximum permissible port number"""
OUTPORT_NTRIP = 2101
"""Default NTRIP caster port"""
ENV_NTRIP_USER = "GNSSRELAY_USER"
"""Environment variable for NTRIP user"""
ENV_NTRIP_PASSWORD = "GNSSRELAY_PASSWORD"
"""Environment variable for NTRIP password"""
USER_AGENT = "NTRIP gnssrelay"
"""User-Agent prefix sent in the NTRIP request"""

STATUS_OK = 0
"""Session healthy"""
STATUS_IO_ERROR = -1
"""Transport failure while streaming"""
STATUS_SETUP_FAILED = -2
"""Connection or initial request failed"""
STATUS_UNAUTHORIZED = -3
"""Credentials rejected by caster"""
STATUS_REJECTED = -4
"""Invalid mountpoint or unrecognised reply"""
STATUS_DESC = {
    STATUS_OK: "healthy",
    STATUS_IO_ERROR: "transport error",
    STATUS_SETUP_FAILED: "setup failed",
    STATUS_UNAUTHORIZED: "unauthorized",
    STATUS_REJECTED: "rejected",
}
"""Status code descriptors"""

ERR_AUTH = "authorization error"
ERR_MOUNTPOINT = "invalid mounting point"
ERR_UNEXPECTED = "unexpected reply from host"
ERR_CLOSED = "connection closed by host"

GGA_PREFIX = "$GPGGA"
"""Prefix of position sentences accepted from the receiver"""
REF_LAT = 55.0
"""Placeholder latitude for synthetic GGA sentences"""
REF_LON = 14.0
"""Placeholder longitude for synthetic GGA sentences"""
REF_ALT = 200
"""Placeholder altitude for synthetic GGA sentences"""

RECEIVER_BAUDRATE = 115200
"""Default receiver serial baud rate"""
RECEIVER_EOL = "\n\r"
"""Receiver command terminator"""
RECEIVER_INIT = (
    "set,/par/dev/ntrip/a/imode,cmd",
    "print,/par/dev/ntrip/a/imode",
    "list,/dev",
    "em,/cur/term,/msg/nmea/GGA:.05",
    "set,/par/cur/term/imode,rtcm3",
)
"""Receiver initialisation command set"""

VERBOSITY_CRITICAL = -1
"""Verbosity critical"""
VERBOSITY_LOW = 0
"""Verbosity error"""
VERBOSITY_MEDIUM = 1
"""Verbosity warning"""
VERBOSITY_HIGH = 2
"""Verbosity info"""
VERBOSITY_DEBUG = 3
"""Verbosity debug"""
LOGGING_LEVELS = {
    VERBOSITY_CRITICAL: "CRITICAL",
    VERBOSITY_LOW: "ERROR",
    VERBOSITY_MEDIUM: "WARNING",
    VERBOSITY_HIGH: "INFO",
    VERBOSITY_DEBUG: "DEBUG",
}
"""Logging level descriptors"""
LOGFORMAT = "{asctime}.{msecs:.0f} - {levelname} - {name} - {message}"
"""Logging format"""
LOGLIMIT = 10485760  # max size of logfile in bytes
"""Logfile limit"""
WAITTIME = 3
"""CLI synthetic position interval in seconds"""
EPILOG = "© 2026 semuadmin (Steve Smith) BSD 3-Clause license"
"""CLI argument parser epilog"""
