"""Domain layer: calendar arithmetic, text parsing, and field resolution.

This layer depends only on the stdlib.
It must never import from services, commands, output, or config.
"""
