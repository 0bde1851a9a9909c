"""
gnssrelay - ntrip_relay_example.py

*** FOR ILLUSTRATION ONLY - NOT FOR PRODUCTION USE ***

Minimal application which reads NMEA GGA sentences from a receiver,
reports them to an NTRIP caster and pushes the RTCM3 correction data
returned by the caster back to the receiver, until the session fails
or the user presses CTRL-C.

If the receiver has no fix yet, a synthetic position derived from
approximate reference coordinates can be used instead by passing
--synthetic 1; correction data is then simply counted.

Usage:

python3 ntrip_relay_example.py --server rtk2go.com --mountpoint MYMOUNT \
    --port /dev/rfcomm0 --ntripuser myuser@mydomain.com --ntrippassword none

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser
from time import sleep

from gnssrelay import (
    VERBOSITY_HIGH,
    HiperReceiver,
    NTRIPClient,
    NTRIPSessionError,
    is_position_sentence,
    set_common_args,
)


def main(**kwargs):
    """
    Main routine.
    """

    server = kwargs.pop("server")
    mountpoint = kwargs.pop("mountpoint")
    user = kwargs.pop("ntripuser")
    password = kwargs.pop("ntrippassword")

    if kwargs["synthetic"]:
        with NTRIPClient(
            server,
            2101,
            mountpoint,
            user,
            password,
            lambda data, length: print(f"{length} bytes of RTCM3 data received"),
        ) as ntc:
            while True:
                ntc.update_coordinates(
                    kwargs["reflat"], kwargs["reflon"], kwargs["refalt"]
                )
                ntc.raise_for_status()
                sleep(3)

    with HiperReceiver(kwargs["port"]) as rcv:
        with NTRIPClient(
            server, 2101, mountpoint, user, password, rcv.push_corrections
        ) as ntc:
            while True:
                raw, parsed = rcv.read_sentence()
                if raw is not None and is_position_sentence(raw):
                    print(parsed)
                    ntc.update_position(raw)
                ntc.raise_for_status()


if __name__ == "__main__":
    ap = ArgumentParser(formatter_class=ArgumentDefaultsHelpFormatter)
    ap.add_argument("-S", "--server", required=True, help="NTRIP caster")
    ap.add_argument("-M", "--mountpoint", required=True, help="NTRIP mountpoint")
    ap.add_argument("--ntripuser", default="anon", help="NTRIP user")
    ap.add_argument("--ntrippassword", default="password", help="NTRIP password")
    ap.add_argument("-P", "--port", default="/dev/rfcomm0", help="receiver port")
    ap.add_argument("--synthetic", type=int, choices=[0, 1], default=0)
    ap.add_argument("--reflat", type=float, default=55.0, help="reference latitude")
    ap.add_argument("--reflon", type=float, default=14.0, help="reference longitude")
    ap.add_argument("--refalt", type=float, default=200, help="reference altitude")
    args = set_common_args("ntrip_relay_example", ap, logdefault=VERBOSITY_HIGH)

    try:
        main(**args)
    except NTRIPSessionError as err:
        print(f"NTRIP session failed with status {err.status}: {err}")
    except KeyboardInterrupt:
        print("Terminated by user")
