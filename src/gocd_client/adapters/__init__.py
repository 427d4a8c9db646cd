"""Adaptadores de I/O (HTTP, codec, resolución de versiones, recursos)."""
