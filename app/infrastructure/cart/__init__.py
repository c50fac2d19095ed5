"""
Infrastructure adapters for the cart bounded context.

Each adapter implements a domain port (ABC) and connects
to external systems: the cart database, the stock service,
the transaction service and bearer tokens.
"""
