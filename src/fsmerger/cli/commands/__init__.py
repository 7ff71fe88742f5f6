"""fsmerger CLI commands (one module per command)."""
