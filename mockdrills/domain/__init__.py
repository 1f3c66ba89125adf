"""Domain layer: value objects, entities, ports and domain exceptions."""
