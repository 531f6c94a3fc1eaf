"""
Shared error handling package.

Centralizes failure-to-HTTP mapping so that every failure is
translated into the same cached error document.
"""
