"""Entry points for POSBRIDGE (command-line interface)."""
