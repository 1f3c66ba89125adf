"""Defines common Value Objects used across different domain contexts.

These objects represent simple values or concepts like thing identifiers,
document formats and signed payloads, ensuring consistency and type safety.
"""

from typing import NewType

# === Thing Lookup Context ===

# Using NewType for semantic clarity, although they are strings at runtime.
ThingId = NewType("ThingId", str)              # Opaque key of a Thing

# === Document Delivery Context ===
FileName = NewType("FileName", str)            # Name of a raw input file
DocumentFormat = NewType("DocumentFormat", str) # Version string, e.g. '4.0'
SignedContent = NewType("SignedContent", bytes) # Envelope produced by a Cryptographer
