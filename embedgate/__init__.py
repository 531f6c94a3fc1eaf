"""
embedgate: the HTTP boundary of an Iframely-compatible embed service.

Layers:
    - domain: Failure types and the embed resolver port. No framework imports.
    - interfaces: FastAPI routers and response schemas.
    - shared: Cross-cutting concerns (error pipeline, response cache,
      origin policy, logging, supervision).
"""
