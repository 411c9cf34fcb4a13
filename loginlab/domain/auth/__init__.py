# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    AccessLevel,
    AuthMode,
    CookieArtifact,
    Decision,
    LogoutOutcome,
    SecurityContext,
    ServerSession,
    ServerSessionArtifact,
    SessionArtifact,
    TokenArtifact,
)

__all__ = [
    "AccessLevel",
    "AuthMode",
    "CookieArtifact",
    "Decision",
    "LogoutOutcome",
    "SecurityContext",
    "ServerSession",
    "ServerSessionArtifact",
    "SessionArtifact",
    "TokenArtifact",
]
