"""Domain layer: value types, diff classification, reconciliation and reporting."""
