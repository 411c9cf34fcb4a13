# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolationError

__all__ = ["InvariantViolationError"]
