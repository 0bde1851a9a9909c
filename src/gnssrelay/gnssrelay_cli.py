"""
gnssrelay_cli.py

CLI wrapper relaying NTRIP correction data to a GNSS receiver.

Reads NMEA sentences from the receiver, reports GGA positions to the
NTRIP caster via NTRIPClient and pushes the returned RTCM data back
to the receiver. With --synthetic 1, no receiver is used; positions
are synthesized from the reference coordinates and correction data
is only logged.

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser
from logging import getLogger
from os import getenv
from time import sleep

from serial import SerialException

from gnssrelay._version import __version__ as VERSION
from gnssrelay.exceptions import ParameterError
from gnssrelay.globals import (
    DEFAULT_TIMEOUT,
    ENV_NTRIP_PASSWORD,
    ENV_NTRIP_USER,
    EPILOG,
    GGA_PREFIX,
    GGA_TICKS,
    OUTPORT_NTRIP,
    POLL_DELAY,
    RECEIVER_BAUDRATE,
    REF_ALT,
    REF_LAT,
    REF_LON,
    STATUS_DESC,
    STATUS_OK,
    WAITTIME,
)
from gnssrelay.helpers import is_position_sentence, set_common_args
from gnssrelay.ntripclient import NTRIPClient
from gnssrelay.receiver import HiperReceiver

logger = getLogger("gnssrelay.gnssrelay_cli")


def log_corrections(data: bytes, length: int):
    """
    Data sink used when no receiver is attached.
    """

    logger.info(f"Received {length} bytes of correction data")


def relay_synthetic(ntc: NTRIPClient, lat: float, lon: float, alt: float, interval: float):
    """
    Report synthetic positions at fixed interval until the session fails.
    """

    while ntc.status == STATUS_OK:
        ntc.update_coordinates(lat, lon, alt)
        sleep(interval)


def relay_receiver(ntc: NTRIPClient, rcv: HiperReceiver, prefix: str):
    """
    Feed receiver position sentences to the NTRIP client until the
    session fails.
    """

    while ntc.status == STATUS_OK:
        raw, _ = rcv.read_sentence()
        if raw is None:
            continue
        logger.info(raw.decode("ascii", errors="replace").strip())
        if is_position_sentence(raw, prefix):
            ntc.update_position(raw)


def runrelay(**kwargs) -> int:
    """
    Start relay with CLI parameters.

    :return: final session status
    :rtype: int
    """

    synthetic = int(kwargs.pop("synthetic", 0))
    receiver = kwargs.pop("receiver", "")
    prefix = kwargs.pop("prefix", GGA_PREFIX)
    interval = float(kwargs.pop("interval", WAITTIME))
    lat = float(kwargs.pop("reflat", REF_LAT))
    lon = float(kwargs.pop("reflon", REF_LON))
    alt = float(kwargs.pop("refalt", REF_ALT))

    if synthetic:
        with NTRIPClient(datasink=log_corrections, **kwargs) as ntc:
            relay_synthetic(ntc, lat, lon, alt, interval)
    else:
        port, baud = (receiver.split("@", 1) + [RECEIVER_BAUDRATE])[:2]
        with HiperReceiver(port, int(baud), DEFAULT_TIMEOUT) as rcv:
            with NTRIPClient(datasink=rcv.push_corrections, **kwargs) as ntc:
                relay_receiver(ntc, rcv, prefix)

    logger.error(
        f"NTRIP session terminated, {STATUS_DESC.get(ntc.status, ntc.status)}"
        f" ({ntc.status}): {ntc.lasterror}"
    )
    return ntc.status


def main():
    """
    CLI Entry point.

    :param: as per NTRIPClient constructor.
    """

    ap = ArgumentParser(
        epilog=EPILOG,
        formatter_class=ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("-V", "--version", action="version", version="%(prog)s " + VERSION)
    ap.add_argument(
        "-S", "--server", required=False, help="NTRIP server (caster) URL", default=""
    )
    ap.add_argument(
        "-P",
        "--port",
        required=False,
        help="NTRIP port",
        type=int,
        default=OUTPORT_NTRIP,
    )
    ap.add_argument(
        "-M", "--mountpoint", required=False, help="NTRIP mountpoint", default=""
    )
    ap.add_argument(
        "--ntripuser",
        required=False,
        help="NTRIP authentication user",
        default=getenv(ENV_NTRIP_USER, "anon"),
    )
    ap.add_argument(
        "--ntrippassword",
        required=False,
        help="NTRIP authentication password",
        default=getenv(ENV_NTRIP_PASSWORD, "password"),
    )
    ap.add_argument(
        "-R",
        "--receiver",
        required=False,
        help="Receiver serial port as port@baudrate (e.g. '/dev/rfcomm0@115200')",
        default=f"/dev/rfcomm0@{RECEIVER_BAUDRATE}",
    )
    ap.add_argument(
        "--prefix",
        required=False,
        help="Prefix of receiver sentences reported to the caster",
        default=GGA_PREFIX,
    )
    ap.add_argument(
        "--synthetic",
        required=False,
        help="Use synthetic positions instead of receiver? 0 = no, 1 = yes",
        type=int,
        choices=[0, 1],
        default=0,
    )
    ap.add_argument(
        "--interval",
        required=False,
        help="Synthetic position interval in seconds",
        type=float,
        default=WAITTIME,
    )
    ap.add_argument(
        "--reflat", required=False, help="reference latitude", type=float, default=REF_LAT
    )
    ap.add_argument(
        "--reflon", required=False, help="reference longitude", type=float, default=REF_LON
    )
    ap.add_argument(
        "--refalt", required=False, help="reference altitude", type=float, default=REF_ALT
    )
    ap.add_argument(
        "--timeout",
        required=False,
        help="Socket timeout in seconds",
        type=float,
        default=DEFAULT_TIMEOUT,
    )
    ap.add_argument(
        "--polldelay",
        required=False,
        help="Delay between NTRIP data polls in seconds",
        type=float,
        default=POLL_DELAY,
    )
    ap.add_argument(
        "--ggaticks",
        required=False,
        help="Data polls between position reports to caster",
        type=int,
        default=GGA_TICKS,
    )
    kwargs = set_common_args("gnssrelay", ap)

    try:
        runrelay(**kwargs)
    except SerialException as err:
        logger.critical(f"Unable to open receiver - {err}")
    except ParameterError as err:
        logger.critical(err)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
