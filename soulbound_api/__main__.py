"""
Entry point for running the service as a module.

Usage:
    python -m soulbound_api serve
"""

from soulbound_api.cli import main

if __name__ == "__main__":
    main()
