"""
Collection of GNSS relay helper methods.

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

# pylint: disable=invalid-name

import logging
import logging.handlers
from argparse import ArgumentParser
from datetime import datetime, timezone
from os import getenv

from pynmeagps import GET, NMEAMessage

from gnssrelay.globals import (
    GGA_PREFIX,
    LOGFORMAT,
    LOGGING_LEVELS,
    LOGLIMIT,
    REF_ALT,
    REF_LAT,
    REF_LON,
    VERBOSITY_CRITICAL,
    VERBOSITY_DEBUG,
    VERBOSITY_HIGH,
    VERBOSITY_LOW,
    VERBOSITY_MEDIUM,
)


def parse_config(configfile: str) -> dict:
    """
    Parse config file.

    :param str configfile: fully qualified path to config file
    :return: config as kwargs, or None if file not found
    :rtype: dict
    :raises: FileNotFoundError
    :raises: ValueError
    """

    config = {}
    try:
        with open(configfile, "r", encoding="utf-8") as infile:
            for cf in infile:
                if cf.strip() == "" or cf[0] == "#":  # blank or comment
                    continue
                key, val = cf.split("=", 1)
                config[key.strip()] = val.strip()
        return config
    except FileNotFoundError as err:
        raise FileNotFoundError(f"Configuration file not found: {configfile}") from err
    except ValueError as err:
        raise ValueError(f"Configuration file invalid: {configfile}, {err}") from err


def set_common_args(
    name: str,
    ap: ArgumentParser,
    logname: str = "gnssrelay",
    logdefault: int = VERBOSITY_MEDIUM,
) -> dict:
    """
    Set common argument parser and logging args.

    :param str name: name of CLI utility e.g. "gnssrelay"
    :param ArgumentParser ap: argument parser instance
    :param str logname: logger name
    :param int logdefault: default logger verbosity level
    :return: parsed arguments as kwargs
    :rtype: dict
    """

    ap.add_argument(
        "-C",
        "--config",
        required=False,
        help=(
            "Fully qualified path to CLI configuration file "
            f"(will use environment variable {name.upper()}_CONF where set)"
        ),
        default=getenv(f"{name.upper()}_CONF", None),
    )
    ap.add_argument(
        "--verbosity",
        required=False,
        help=(
            f"Log message verbosity "
            f"{VERBOSITY_CRITICAL} = critical, "
            f"{VERBOSITY_LOW} = low (error), "
            f"{VERBOSITY_MEDIUM} = medium (warning), "
            f"{VERBOSITY_HIGH} = high (info), {VERBOSITY_DEBUG} = debug"
        ),
        type=int,
        choices=[
            VERBOSITY_CRITICAL,
            VERBOSITY_LOW,
            VERBOSITY_MEDIUM,
            VERBOSITY_HIGH,
            VERBOSITY_DEBUG,
        ],
        default=logdefault,
    )
    ap.add_argument(
        "--logtofile",
        required=False,
        help="fully qualified log file name, or '' for no log file",
        type=str,
        default="",
    )

    kwargs = vars(ap.parse_args())
    # config file settings will supplement CLI and default args
    cfg = kwargs.pop("config", None)
    if cfg is not None:
        kwargs = {**kwargs, **parse_config(cfg)}

    logger = logging.getLogger(logname)
    set_logging(
        logger, kwargs.pop("verbosity", logdefault), kwargs.pop("logtofile", "")
    )

    return kwargs


def set_logging(
    logger: logging.Logger,
    verbosity: int = VERBOSITY_MEDIUM,
    logtofile: str = "",
    logform: str = LOGFORMAT,
    limit: int = LOGLIMIT,
):
    """
    Set logging format and level.

    :param logging.Logger logger: module log handler
    :param int verbosity: verbosity level -1,0,1,2,3 (1 - MEDIUM)
    :param str logtofile: fully qualified log file name ("")
    :param str logform: logging format (datetime - level - name)
    :param int limit: maximum logfile size in bytes (10MB)
    """

    try:
        level = LOGGING_LEVELS[int(verbosity)]
    except (KeyError, ValueError):
        level = logging.WARNING

    logger.setLevel(logging.DEBUG)
    logformat = logging.Formatter(
        logform,
        datefmt="%Y-%m-%d %H:%M:%S",
        style="{",
    )
    if logtofile == "":
        loghandler = logging.StreamHandler()
    else:
        loghandler = logging.handlers.RotatingFileHandler(
            logtofile, mode="a", maxBytes=limit, backupCount=10, encoding="utf-8"
        )
    loghandler.setFormatter(logformat)
    loghandler.setLevel(level)
    logger.addHandler(loghandler)


def format_gga(
    lat: float = REF_LAT,
    lon: float = REF_LON,
    alt: float = REF_ALT,
    utc: datetime = None,
) -> str:
    """
    Format a synthetic NMEA GGA sentence for the given coordinates
    using pynmeagps.

    Fix quality, satellites, HDOP, separation, correction age and
    station are fixed placeholder values; this is a fallback for when
    no real sentence is available from the receiver.

    :param float lat: latitude in decimal degrees (55.0)
    :param float lon: longitude in decimal degrees (14.0)
    :param float alt: altitude in metres (200)
    :param datetime utc: time of fix (now(utc))
    :return: sentence e.g. "$GPGGA,140816.00,5500.00000,N,01400.00000,E,...*4C"
    :rtype: str
    """

    if utc is None:
        utc = datetime.now(timezone.utc)
    parsed_data = NMEAMessage(
        "GP",
        "GGA",
        GET,
        time=utc.time(),
        lat=float(lat),
        lon=float(lon),
        quality=4,
        numSV=10,
        HDOP=1,
        alt=alt,
        altUnit="M",
        sep=1,
        sepUnit="M",
        diffAge=7,
        diffStation=0,
    )
    return parsed_data.serialize().decode("ascii").strip()


def is_position_sentence(sentence: object, prefix: str = GGA_PREFIX) -> bool:
    """
    Check if sentence is a position (fix) report.

    :param object sentence: sentence as str or bytes
    :param str prefix: expected sentence prefix ("$GPGGA")
    :return: True/False
    :rtype: bool
    """

    if isinstance(sentence, (bytes, bytearray)):
        return sentence.startswith(prefix.encode("ascii"))
    if isinstance(sentence, str):
        return sentence.startswith(prefix)
    return False
