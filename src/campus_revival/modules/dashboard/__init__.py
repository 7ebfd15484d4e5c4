"""Dashboard module - Read-side aggregation for the current user."""
