"""
Infrastructure layer package.

Contains adapters that implement domain ports and connect
to external systems: the database, remote services, tokens.
"""
