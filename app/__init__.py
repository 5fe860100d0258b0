"""Application layer: use cases, browse state, console view and startup."""
