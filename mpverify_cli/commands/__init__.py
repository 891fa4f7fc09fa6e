"""
CLI command modules.
"""

from mpverify_cli.commands import verify

__all__ = ["verify"]
