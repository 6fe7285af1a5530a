"""Pure math helpers."""
