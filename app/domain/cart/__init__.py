"""
Cart bounded context: domain layer.

This module contains all domain logic for the shopping cart:
- Cart line bookkeeping per user
- Stock availability and category-diversity rules
- Port contracts for the cart store, stock catalog,
  identity provider and transaction ledger
"""
