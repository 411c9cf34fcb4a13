# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import FederatedUser, LocalUser, Principal, User, UserRole, as_principal

__all__ = ["FederatedUser", "LocalUser", "Principal", "User", "UserRole", "as_principal"]
