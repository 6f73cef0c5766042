######################################################################
#
# File: b2lite/version.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

from importlib.metadata import version as _version
from sys import version_info as _version_info

__all__ = [
    "VERSION",
    "PYTHON_VERSION",
    "USER_AGENT",
]

VERSION = _version("b2lite")

PYTHON_VERSION = ".".join(map(str, _version_info[:3]))  # something like: 3.11.4

USER_AGENT = f"b2lite/{VERSION} python/{PYTHON_VERSION}"
