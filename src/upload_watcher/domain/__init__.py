"""Domain layer: models, exceptions and service interfaces."""
