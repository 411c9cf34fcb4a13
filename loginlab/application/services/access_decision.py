# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from loginlab.domain.auth.entities import (
    ALLOW,
    DENY_FORBIDDEN,
    DENY_UNAUTHENTICATED,
    AccessLevel,
    Decision,
)
from loginlab.domain.users.entities import Principal, User


def authorize(principal: User | Principal | None, required: AccessLevel) -> Decision:
    if required is AccessLevel.PUBLIC:
        return ALLOW
    if principal is None:
        return DENY_UNAUTHENTICATED
    role = required.required_role
    if role is not None and principal.role is not role:
        return DENY_FORBIDDEN
    return ALLOW
