"""Front ends: terminal game, UCI protocol and REST API."""
