"""Service layer: release logic with no CLI or terminal dependencies."""
