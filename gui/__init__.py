"""PyQt6 inspector for the baby brain."""
