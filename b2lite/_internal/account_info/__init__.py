######################################################################
#
# File: b2lite/_internal/account_info/__init__.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
