"""Service layer: RPC contracts, routing, and the shipped contracts.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
