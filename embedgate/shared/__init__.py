"""
Shared module package.

Contains cross-cutting concerns used by every route:
- Error classification and the error response pipeline
- Response caching
- Origin policy and product headers
- Logging configuration and the uncaught-failure guard
"""
