"""Domain Interfaces (Ports):

Defines the contracts (Abstract Base Classes) that storage backends must
implement. The cache service depends on these interfaces, not on concrete
adapters.
"""
