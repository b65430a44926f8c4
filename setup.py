"""
AccountStore: local persistence for ledger account state

AccountStore keeps accounts and their content-addressed code, storage and vault
components in a SQLite database, with versioned schema migrations and a strict
serialization boundary for hashes and 64-bit integers.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh.readlines() if line.strip() and not line.startswith("#")]

# Get version from the package
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '.'))
from accountstore.units.version import get_version
from accountstore import VERSION

setup(
    name="AccountStore",
    version=get_version(VERSION),
    description="Local SQLite persistence for ledger account state",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=['accountstore', 'accountstore.*'], exclude=['tests*']),
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "Topic :: Database",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords="ledger, accounts, sqlite, persistence",
)
