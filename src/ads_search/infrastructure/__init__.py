"""
Infrastructure Layer - External service integrations.

Contains:
- ads: ADS search/export API client
- cache: Detail cache
- storage: Key/value persistence
"""

from __future__ import annotations
