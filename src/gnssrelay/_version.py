"""
gnssrelay version

Created on 17 Oct 2026

:author: semuadmin
:copyright: SEMU Consulting © 2026
:license: BSD 3-Clause
"""

__version__ = "1.0.0"
