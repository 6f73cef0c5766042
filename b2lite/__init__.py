######################################################################
#
# File: b2lite/__init__.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

# Set default logging handler to avoid "No handler found" warnings.
import logging as _logging

_logging.getLogger("b2lite").addHandler(_logging.NullHandler())

import b2lite.version  # noqa: E402
__version__ = b2lite.version.VERSION
assert __version__  # PEP-0396

# this file maps the external interface into internal interface
# it will come handy if we ever need to move something

# core

from b2lite._internal.api import B2Api  # noqa: E402
from b2lite._internal.api import Services  # noqa: E402
from b2lite._internal.session import B2Session  # noqa: E402
from b2lite._internal.account_info.in_memory import InMemoryAccountInfo  # noqa: E402

# raw api & transport

from b2lite._internal.api_config import B2HttpApiConfig, DEFAULT_HTTP_API_CONFIG  # noqa: E402
from b2lite._internal.b2http import B2Http  # noqa: E402
from b2lite._internal.raw_api import AbstractRawApi, B2RawHTTPApi, check_b2_filename  # noqa: E402
from b2lite._internal.raw_simulator import RawSimulator  # noqa: E402

# transfer

from b2lite._internal.transfer.inbound.download_manager import DownloadManager  # noqa: E402
from b2lite._internal.transfer.inbound.downloaded_file import DownloadedFile  # noqa: E402
from b2lite._internal.transfer.outbound.upload_manager import UploadManager  # noqa: E402
from b2lite._internal.transfer.outbound.upload_request import UploadRequest  # noqa: E402
from b2lite._internal.transfer.outbound.upload_source import UploadSourceLocalFile  # noqa: E402

# constants

from b2lite._internal.http_constants import (  # noqa: E402
    API_VERSION,
    BUCKET_TYPE_ALL_PRIVATE,
    BUCKET_TYPE_ALL_PUBLIC,
    DEFAULT_BUCKET_TYPE,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_MAX_UPLOAD_ATTEMPTS,
    DEFAULT_REALM,
    REALM_URLS,
)

# utils

from b2lite._internal.utils import b2_url_decode, b2_url_encode, hex_sha1_of_file  # noqa: E402
