"""ThingService implementations.

Bounded Context: Thing Lookup
"""
