"""Domain layer for AccountHub: entities, business rules and domain errors."""
