"""Service layer: calendar operations returning ServiceResult.

Services may import from the domain and config layers.
They must never import from commands or output.
"""
