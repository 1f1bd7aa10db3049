"""Application layer: composers, use cases and engine composition."""
