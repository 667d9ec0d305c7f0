"""Credit card issuance API: register a person by email and issue card numbers."""

__version__ = "1.0.0"
