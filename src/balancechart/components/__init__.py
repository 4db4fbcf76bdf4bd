"""Qt widgets rendering chart geometry."""
