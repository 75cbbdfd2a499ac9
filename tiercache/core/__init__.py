"""Core Layer: the expiration policy and the tiered cache service.

Connects the domain models with the storage tiers in the infrastructure layer.
"""
