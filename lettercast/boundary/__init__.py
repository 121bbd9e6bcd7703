"""
Boundary layer for external system integrations.

Handles all interactions with external systems: the key-value store,
the relational audit store, the upstream LLM service and the letter
origin.
"""
