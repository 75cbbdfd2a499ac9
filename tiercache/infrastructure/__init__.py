"""Infrastructure Layer: Contains concrete implementations and adapters.

Memory store, adapter bridge, bundled adapters, configuration and logging.
"""
