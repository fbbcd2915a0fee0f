"""
Server package for the chat relay.

This package contains all server-side functionality including:
- Connection handling and the shared user registry
- Direct message routing and online-users queries
- Configuration and utilities
"""
