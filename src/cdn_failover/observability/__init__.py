"""Observability for the CDN failover resolver."""
