"""Core: configuration, lifespan, rate limiting, exception handlers."""
