# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response schemas for the EdConnect API.

JSON bodies use camelCase keys; request bodies also accept snake_case.
"""
