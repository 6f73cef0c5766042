######################################################################
#
# File: b2lite/_internal/account_info/exception.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

from ..exception import PreconditionError


class MissingAccountData(PreconditionError):
    """
    Raised when a piece of account data is read before a successful authorization.
    """

    def __init__(self, key):
        """
        :param key: a key for getting account data
        :type key: str
        """
        super().__init__(f'Missing account data: {key}')
        self.key = key

    def __str__(self):
        return self.message
