"""
Domain layer package.

Contains failure types and port interfaces.
No framework imports, no IO, no side effects.
"""
