"""objectsearch: keyword search across registered object types."""
