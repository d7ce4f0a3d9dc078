"""Upstream connectors.

Canonical location:
  vies_proxy.connectors.vies.*: EU VIES checkVat SOAP service
"""
