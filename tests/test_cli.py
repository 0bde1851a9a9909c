"""
CLI tests for gnssrelay

Created on 17 Oct 2026

*** NB: must be saved in UTF-8 format ***

@author: semuadmin
"""

# pylint: disable=line-too-long, invalid-name, missing-docstring, no-member

import unittest
from subprocess import PIPE, run
from unittest.mock import patch

import pytest

from gnssrelay.gnssrelay_cli import (
    log_corrections,
    relay_receiver,
    relay_synthetic,
    runrelay,
)

GGA = b"$GPGGA,135205,5500.00,N,01400.00,E,4,10,1,200,M,1,M,8,0*67\r\n"
RMC = b"$GPRMC,135205,A,5500.00,N,01400.00,E,0.0,0.0,171026,,,A*7C\r\n"


class FakeClient:
    """
    Stand-in NTRIPClient which fails after a set number of updates.
    """

    def __init__(self, updates: int = 1):
        self.status = 0
        self.lasterror = ""
        self.positions = []
        self.coordinates = []
        self._updates = updates

    def _count(self):
        if len(self.positions) + len(self.coordinates) >= self._updates:
            self.status = -1
            self.lasterror = "Response loop failed"

    def update_position(self, sentence):
        self.positions.append(sentence)
        self._count()

    def update_coordinates(self, lat, lon, alt):
        self.coordinates.append((lat, lon, alt))
        self._count()

    def stop(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.stop()


class FakeReceiver:
    """
    Stand-in HiperReceiver returning scripted sentences.
    """

    def __init__(self, sentences: list):
        self._sentences = list(sentences)
        self.pushed = []

    def read_sentence(self):
        if self._sentences:
            return self._sentences.pop(0), None
        return None, None

    def push_corrections(self, data, length=None):
        self.pushed.append(data)


class CLITest(unittest.TestCase):
    def setUp(self):
        self.maxDiff = None

    def tearDown(self):
        pass

    def testhelp(self):
        res = run(["gnssrelay", "-h"], stdout=PIPE, check=False)
        res = res.stdout.decode("utf-8")
        self.assertEqual(res[0:16], "usage: gnssrelay")

    def testversion(self):
        res = run(["gnssrelay", "-V"], stdout=PIPE, check=False)
        res = res.stdout.decode("utf-8")
        self.assertEqual(res[0:9], "gnssrelay")

    def testrelayreceiver(self):  # only GGA sentences reported
        ntc = FakeClient(1)
        rcv = FakeReceiver([RMC, None, GGA, GGA])
        relay_receiver(ntc, rcv, "$GPGGA")
        self.assertEqual(ntc.positions, [GGA])
        self.assertEqual(ntc.status, -1)

    def testrelayreceiverprefix(self):
        ntc = FakeClient(1)
        rcv = FakeReceiver([GGA, RMC])
        relay_receiver(ntc, rcv, "$GPRMC")
        self.assertEqual(ntc.positions, [RMC])

    @pytest.mark.synthetic
    def testrelaysynthetic(self):
        ntc = FakeClient(3)
        relay_synthetic(ntc, 51.5, -0.125, 35.5, 0)
        self.assertEqual(ntc.coordinates, [(51.5, -0.125, 35.5)] * 3)

    @pytest.mark.synthetic
    def testrunrelaysynthetic(self):
        ntc = FakeClient(2)
        with patch("gnssrelay.gnssrelay_cli.NTRIPClient", return_value=ntc) as ntcls:
            with self.assertLogs("gnssrelay.gnssrelay_cli", level="ERROR"):
                status = runrelay(
                    synthetic=1,
                    interval=0,
                    reflat=55.0,
                    reflon=14.0,
                    refalt=200,
                    server="caster.example.com",
                    port=2101,
                    mountpoint="MOUNT",
                )
        self.assertEqual(status, -1)
        self.assertEqual(ntc.coordinates, [(55.0, 14.0, 200.0)] * 2)
        _, kwargs = ntcls.call_args
        self.assertIs(kwargs["datasink"], log_corrections)
        self.assertEqual(kwargs["server"], "caster.example.com")
        self.assertNotIn("reflat", kwargs)

    def testrunrelayreceiver(self):
        ntc = FakeClient(1)
        rcv = FakeReceiver([GGA])
        with patch("gnssrelay.gnssrelay_cli.NTRIPClient", return_value=ntc) as ntcls, patch(
            "gnssrelay.gnssrelay_cli.HiperReceiver"
        ) as rcvcls:
            rcvcls.return_value.__enter__.return_value = rcv
            with self.assertLogs("gnssrelay.gnssrelay_cli", level="ERROR"):
                status = runrelay(
                    synthetic=0,
                    receiver="/dev/rfcomm1@9600",
                    server="caster.example.com",
                )
        self.assertEqual(status, -1)
        self.assertEqual(ntc.positions, [GGA])
        self.assertEqual(rcvcls.call_args[0][:2], ("/dev/rfcomm1", 9600))
        self.assertEqual(ntcls.call_args[1]["datasink"], rcv.push_corrections)

    def testlogcorrections(self):
        with self.assertLogs("gnssrelay.gnssrelay_cli", level="INFO") as logs:
            log_corrections(b"\xd3\x00\x13", 3)
        self.assertIn("Received 3 bytes of correction data", logs.output[0])


if __name__ == "__main__":
    # import sys;sys.argv = ['', 'Test.testName']
    unittest.main()
