"""Physics: vectors, flight models and integration."""
