"""
Entry point for running zimkit CLI as a module.

Usage: python -m zimkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
