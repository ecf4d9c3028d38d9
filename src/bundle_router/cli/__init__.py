"""Command line entry point for bundle-router."""

from .commands import app


def main():
    app()


__all__ = ["app", "main"]
