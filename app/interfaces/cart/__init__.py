"""
Cart bounded context: HTTP interface.

Routes, request/response schemas and the dependency wiring
that builds cart use cases per request.
"""
