# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
easy-alias core package.

Stores shell commands under short alias names in a flat per-user file
and runs them, filling ``**x`` placeholders from ``-s`` substitutions.
"""

__version__ = "0.1.0"

from .kernel import Kernel as Kernel  # noqa: F401 (re-export)
from .resolver import AliasResolver as AliasResolver  # noqa: F401 (re-export)
