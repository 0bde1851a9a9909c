"""
Created on 17 Oct 2026

@author: semuadmin
"""
import re

import setuptools

with open("src/gnssrelay/_version.py", "r", encoding="utf-8") as fh:
    VERSION = re.search(r'__version__ = "(.+)"', fh.read()).group(1)

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="gnssrelay",
    version=VERSION,
    author="semuadmin",
    author_email="semuadmin@semuconsulting.com",
    description="NTRIP 1.0 client relaying RTCM correction data to an RTK rover receiver",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    install_requires=[
        "pynmeagps>=1.0.0",
        "pyserial>=3.5",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "gnssrelay = gnssrelay.gnssrelay_cli:main",
        ]
    },
    license="BSD 3-Clause 'Modified' License",
    keywords="gnssrelay pynmeagps GNSS GPS NMEA RTCM RTCM3 RTK NTRIP rover",
    platforms="Windows, MacOS, Linux",
    classifiers=[
        "Operating System :: OS Independent",
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: BSD License",
        "Topic :: Utilities",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    python_requires=">=3.9",
)
