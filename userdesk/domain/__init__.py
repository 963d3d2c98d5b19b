"""Domain layer: entities and the contracts of external collaborators."""
