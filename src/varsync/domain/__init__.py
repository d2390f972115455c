"""Domain layer for prompt variable reconciliation."""
