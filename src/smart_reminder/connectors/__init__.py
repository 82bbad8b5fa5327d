"""Display connectors (console)."""
