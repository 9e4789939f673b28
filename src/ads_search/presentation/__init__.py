"""Presentation layer - MCP server exposing the workspace as tools."""

from __future__ import annotations
