"""
Entry point for running xunit_reporter as a module.

Usage:
    python -m xunit_reporter [command] [options]
"""

from xunit_reporter.cli import main

if __name__ == "__main__":
    main()
