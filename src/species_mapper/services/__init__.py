"""
Shared service utilities.

- http.py - requests session with retry/backoff, file download helper
"""
