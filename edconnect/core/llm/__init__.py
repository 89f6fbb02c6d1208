# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""LLM client module using LiteLLM.

Example:
    >>> from edconnect.core.llm import LLMClient
    >>> client = LLMClient()
    >>> response = await client.complete_with_messages(
    ...     [{"role": "user", "content": "What is 2+2?"}]
    ... )
"""

from edconnect.core.llm.client import LLMClient, LLMError, LLMResponse

__all__ = [
    "LLMClient",
    "LLMError",
    "LLMResponse",
]
