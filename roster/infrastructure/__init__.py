"""Infrastructure: persistence, security, and external service adapters."""
