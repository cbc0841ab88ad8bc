"""
Shortener CLI.

Command-line client for a remote URL-shortening service.
"""
