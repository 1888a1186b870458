"""POSBRIDGE command-line interface."""
