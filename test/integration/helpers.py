######################################################################
#
# File: test/integration/helpers.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import os
import secrets
import string

from b2lite import B2Api

FILE_NAME_PREFIX = 'b2lite-test-'
RNG = secrets.SystemRandom()


def random_file_name(prefix: str = FILE_NAME_PREFIX, length: int = 12) -> str:
    return prefix + ''.join(RNG.choice(string.ascii_lowercase + string.digits) for _ in range(length))


def authorize(b2_auth_data) -> B2Api:
    realm = os.environ.get('B2_TEST_ENVIRONMENT', 'production')
    b2_api = B2Api(*b2_auth_data, realm=realm)
    b2_api.authorize()
    return b2_api
