"""HTTP API for the CDN failover resolver."""
