"""restohub command line (Typer + Rich)."""
