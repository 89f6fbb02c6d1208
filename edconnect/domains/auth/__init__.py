# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain services.

This module provides authentication services:
- Password hashing with bcrypt
- JWT token creation and validation
- Registration, login and token refresh

Exports:
    PasswordHasher: Secure password hashing using bcrypt.
    JWTManager: JWT token creation and validation.
    AuthService: Account and token service.
"""

from edconnect.domains.auth.jwt import JWTManager
from edconnect.domains.auth.password import PasswordHasher
from edconnect.domains.auth.service import AuthService

__all__ = [
    "PasswordHasher",
    "JWTManager",
    "AuthService",
]
