######################################################################
#
# File: test/unit/fixtures/__init__.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

from .b2http import *  # noqa
from .raw_api import *  # noqa
from .session import *  # noqa
