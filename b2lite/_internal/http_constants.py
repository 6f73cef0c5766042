######################################################################
#
# File: b2lite/_internal/http_constants.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

# These constants are needed in different modules, so they are stored in this module, that
# imports nothing, thus avoiding circular imports

API_VERSION = 'v1'

REALM_URLS = {
    'production': 'https://api.backblazeb2.com',
    'dev': 'http://api.backblazeb2.xyz:8180',
    'staging': 'https://api.backblaze.net',
}
DEFAULT_REALM = 'production'

BUCKET_TYPE_ALL_PUBLIC = 'allPublic'
BUCKET_TYPE_ALL_PRIVATE = 'allPrivate'
DEFAULT_BUCKET_TYPE = BUCKET_TYPE_ALL_PRIVATE

# Lets the service pick the content type from the file name extension
DEFAULT_CONTENT_TYPE = 'b2/x-auto'

FILE_INFO_HEADER_PREFIX = 'X-Bz-Info-'
FILE_INFO_HEADER_PREFIX_LOWER = FILE_INFO_HEADER_PREFIX.lower()

FILE_NAME_HEADER = 'X-Bz-File-Name'
CONTENT_SHA1_HEADER = 'X-Bz-Content-Sha1'
CONTENT_SHA1_HEADER_LOWER = CONTENT_SHA1_HEADER.lower()

# SHA-1 hash key for large files
LARGE_FILE_SHA1 = 'large_file_sha1'
LARGE_FILE_SHA1_HEADER_LOWER = FILE_INFO_HEADER_PREFIX_LOWER + LARGE_FILE_SHA1

# Prefix the service puts on a client-declared checksum it did not verify
UNVERIFIED_CHECKSUM_PREFIX = 'unverified:'

# Value of X-Bz-Content-Sha1 for files without a whole-file checksum
NO_CHECKSUM = 'none'

# Error signature used for failures that did not come from a well-formed service response
APPLICATION_ERROR_STATUS = 0
APPLICATION_ERROR_CODE = 'application_error'
APPLICATION_ERROR_MESSAGE = 'Error connecting to B2 service.'

DEFAULT_MAX_UPLOAD_ATTEMPTS = 3
UPLOAD_RETRY_BASE_DELAY = 0.05  # seconds; doubled before every further retry

DOWNLOAD_CHUNK_SIZE = 1024 * 1024
