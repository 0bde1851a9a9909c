"""
Helper and Static method tests for gnssrelay

Created on 17 Oct 2026

*** NB: must be saved in UTF-8 format ***

@author: semuadmin
"""

# pylint: disable=line-too-long, invalid-name, missing-docstring, no-member

import logging
import unittest
from datetime import datetime, timezone
from os import path

import pytest
from pynmeagps import NMEAReader, calc_checksum

from gnssrelay import (
    NTRIPSessionError,
    format_gga,
    is_position_sentence,
    parse_config,
    set_logging,
)


class StaticTest(unittest.TestCase):
    def setUp(self):
        self.maxDiff = None

    def tearDown(self):
        pass

    @pytest.mark.synthetic
    def testformatgga(self):
        utc = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)
        self.assertEqual(
            format_gga(utc=utc),
            "$GPGGA,120000.00,5500.00000,N,01400.00000,E,4,10,1,200,M,1,M,7,0*45",
        )
        utc = datetime(2026, 10, 17, 9, 5, 2, tzinfo=timezone.utc)
        self.assertEqual(
            format_gga(51.5, -0.125, 35.5, utc),
            "$GPGGA,090502.00,5130.00000,N,00007.50000,W,4,10,1,35.5,M,1,M,7,0*75",
        )
        utc = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        self.assertEqual(
            format_gga(0, 0, 0, utc),
            "$GPGGA,000000.00,0000.00000,N,00000.00000,E,4,10,1,0,M,1,M,7,0*41",
        )

    @pytest.mark.synthetic
    def testformatgganow(self):
        gga = format_gga()
        body, cksum = gga[1:].split("*")
        self.assertEqual(len(body.split(",")[1]), 9)
        self.assertEqual(cksum, calc_checksum(body))
        self.assertFalse(gga.endswith("\r\n"))

    @pytest.mark.synthetic
    def testformatggaparse(self):  # synthetic sentence is valid NMEA
        utc = datetime(2026, 10, 17, 9, 5, 2, tzinfo=timezone.utc)
        gga = format_gga(51.5, -0.125, 35.5, utc)
        msg = NMEAReader.parse(f"{gga}\r\n".encode())
        self.assertEqual(msg.msgID, "GGA")
        self.assertAlmostEqual(msg.lat, 51.5, 6)
        self.assertAlmostEqual(msg.lon, -0.125, 6)
        self.assertEqual(msg.quality, 4)
        self.assertEqual(msg.numSV, 10)
        self.assertEqual(msg.diffStation, 0)
        self.assertAlmostEqual(msg.alt, 35.5, 3)
        self.assertAlmostEqual(msg.diffAge, 7, 3)

    @pytest.mark.synthetic
    def testformatggaprecision(self):  # minutes kept to 5 decimal places
        utc = datetime(2026, 10, 17, 9, 5, 2, tzinfo=timezone.utc)
        msg = NMEAReader.parse(
            f"{format_gga(-33.8568123, 151.2093456, 58, utc)}\r\n".encode()
        )
        self.assertAlmostEqual(msg.lat, -33.8568123, 6)
        self.assertAlmostEqual(msg.lon, 151.2093456, 6)
        self.assertEqual(msg.NS, "S")
        self.assertEqual(msg.EW, "E")

    def testispositionsentence(self):
        GGA = "$GPGGA,135205,5500.00,N,01400.00,E,4,10,1,200,M,1,M,8,0*67"
        self.assertTrue(is_position_sentence(GGA))
        self.assertTrue(is_position_sentence(f"{GGA}\r\n".encode()))
        self.assertFalse(is_position_sentence("$GPRMC,135205,A,5500.00,N"))
        self.assertFalse(is_position_sentence(b"$GNGGA,135205"))
        self.assertTrue(is_position_sentence(b"$GNGGA,135205", "$GNGGA"))
        self.assertFalse(is_position_sentence(None))
        self.assertFalse(is_position_sentence(""))

    def testparseconfig(self):
        EXPECTED_RESULT = {
            "server": "caster.example.com",
            "port": "2101",
            "mountpoint": "MOUNT",
            "receiver": "/dev/rfcomm0@115200",
            "polldelay": "0.5",
        }
        cfg = parse_config(path.join(path.dirname(__file__), "gnssrelay.conf"))
        self.assertEqual(cfg, EXPECTED_RESULT)

    def testparseconfignotfound(self):
        with self.assertRaisesRegex(FileNotFoundError, "Configuration file not found"):
            parse_config(path.join(path.dirname(__file__), "nonexistent.conf"))

    def testsetlogging(self):
        logger = logging.getLogger("gnssrelay.test_static")
        set_logging(logger, 2)
        handler = logger.handlers[-1]
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(handler.level, logging.INFO)
        logger.removeHandler(handler)
        set_logging(logger, "bogus")
        handler = logger.handlers[-1]
        self.assertEqual(handler.level, logging.WARNING)
        logger.removeHandler(handler)

    def testsessionerror(self):
        err = NTRIPSessionError(-3, "authorization error")
        self.assertEqual(err.status, -3)
        self.assertIn("authorization error", str(err))


if __name__ == "__main__":
    # import sys;sys.argv = ['', 'Test.testName']
    unittest.main()
