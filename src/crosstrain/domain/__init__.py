"""Domain layer — document headers, value coercion, and merge primitives.

This layer depends only on stdlib and structlog.
It must never import from config, output, or commands.
"""
