"""CLI (Typer): comandos de usuario sobre el cliente."""
