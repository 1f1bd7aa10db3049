"""Domain layer: models, repository contracts and engines."""
