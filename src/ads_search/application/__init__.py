"""
Application Layer - Use cases and services.

Contains:
- citation: Inline/summary formatting and citation style selection
- search: Cursor pagination over search sessions
- bibliography: Saved-paper collection
- export: Export formats and bulk export
- workspace: Facade binding the services for one user
"""

from __future__ import annotations
