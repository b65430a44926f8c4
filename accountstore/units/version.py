"""
Version utility functions for AccountStore.

This module provides functions for managing and retrieving version information.
"""

from typing import Tuple


VERSION = (0, 1, 0, "dev", 1)


def get_version(version: Tuple[int, int, int, str, int] = VERSION) -> str:
    """
    Return a PEP 440-compliant version number from VERSION.

    Args:
        version: Version tuple (major, minor, micro, releaselevel, serial)
                If not provided, uses the global VERSION tuple

    Returns:
        PEP 440-compliant version string
    """
    major, minor, micro, releaselevel, serial = version

    version_str = f"{major}.{minor}"
    if micro is not None:
        version_str += f".{micro}"

    # Add release level if not final
    if releaselevel != "final":
        if releaselevel == "dev":
            version_str += ".dev"
        elif releaselevel == "alpha":
            version_str += "a"
        elif releaselevel == "beta":
            version_str += "b"
        else:
            version_str += releaselevel
        if serial > 0:
            version_str += str(serial)

    return version_str
