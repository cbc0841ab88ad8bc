#!/usr/bin/env python3
"""
Shortener CLI.

Command-line client for the URL-shortening service.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                                   # Show help
    python cli.py http://example.com                       # Shorten a link
    python cli.py http://example.com+mylink                # Shorten under a chosen string ID
    python cli.py stats mylink                             # Show clicks and destination
    python cli.py --base-url http://short.example:8080 ... # Talk to another service
"""

from shortener.cli.app import app

if __name__ == "__main__":
    app()
