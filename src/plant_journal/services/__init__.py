"""
Shared utilities for talking to external services.

- http.py - requests session with retry/timeout and a JSON POST helper
"""
