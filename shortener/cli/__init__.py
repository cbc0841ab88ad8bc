"""
CLI Client Module.

Command-line client built with Typer for the URL-shortening service.

Architecture:
- ShortenerClient is the protocol layer: one request per operation,
  every answer classified as Success, Rejected or Unreachable
- Commands are a thin presentation layer looping over arguments
- CLI calls the service via HTTP (httpx)

Usage:
    shortener --help
    shortener http://example.com http://example.org+mylink
    shortener stats mylink
"""
