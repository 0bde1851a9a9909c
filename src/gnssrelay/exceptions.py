"""
gnssrelay Custom Exception Types

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""


class ParameterError(Exception):
    """Parameter Error Class."""


class GNSSRelayError(Exception):
    """
    Master GNSS Relay Error Class.

    Any other gnssrelay exceptions defined here should inherit from this.
    """


class NTRIPSessionError(GNSSRelayError):
    """
    NTRIP Session Error Class.

    Carries the numeric session status alongside the error text.
    """

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
