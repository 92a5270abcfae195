"""
Entry point for running zimkit CLI as a module.

Usage: python -m zimkit [command] [options]
"""

from zimkit.cli.parser import main

if __name__ == "__main__":
    main()
