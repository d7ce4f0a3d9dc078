"""VIES proxy: EU VAT number validation over the Commission's SOAP service."""

__version__ = "1.1.0"
