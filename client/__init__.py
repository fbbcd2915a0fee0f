"""
Client package for the chat relay.

This package contains the terminal client:
- Chat messaging
- Configuration and utilities
"""
