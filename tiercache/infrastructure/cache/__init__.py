"""Storage tiers used by the tiered cache service.

Provides the lock-guarded in-memory store, the bridge to the optional
external adapter and the bundled adapter implementations.
"""
