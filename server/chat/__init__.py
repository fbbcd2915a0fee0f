"""
Chat module for server-side messaging functionality.

Handles:
- Username registration
- Per-connection lifecycle
- Direct message routing
- Online user listing
"""
