"""Core: configuration, request search context, lifespan and exception handlers."""
