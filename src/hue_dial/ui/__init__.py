"""GTK 4 adapter widgets."""
