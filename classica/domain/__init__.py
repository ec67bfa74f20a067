"""Domain layer - entities, errors, protocols and pure rules."""
