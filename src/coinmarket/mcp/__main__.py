"""Allow ``python -m coinmarket.mcp``."""

from .server import run

run()
