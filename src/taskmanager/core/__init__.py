"""Core security, token and error primitives."""
