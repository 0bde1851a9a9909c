"""
pytest configuration for gnssrelay tests.

Created on 17 Oct 2026

@author: semuadmin
"""


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "synthetic: exercises synthetic (placeholder) position sentences",
    )
