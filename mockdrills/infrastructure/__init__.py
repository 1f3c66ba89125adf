"""Infrastructure Layer: concrete adapters for the domain ports.

Configuration, logging, console display, catalog lookup, recognition,
signing, delivery and local file access live here.
"""
