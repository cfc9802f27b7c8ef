"""
Life Destiny - LLM-backed Bazi life analysis client.

This package contains:
- core: Domain models and pillar metadata (polarity, Da Yun direction)
- prompts: Prompt templates and the request payload builder
- integration: Chat-completion orchestrator, error taxonomy, response parsing
- settings: Environment-driven configuration
- cli: Command-line entry point
"""

from __future__ import annotations

__version__ = "0.1.0"
