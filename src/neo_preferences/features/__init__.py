"""Feature modules for neo-preferences."""
