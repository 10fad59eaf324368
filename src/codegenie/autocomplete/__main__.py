"""
Entry point for running the completion service as a module.

Usage:
    python -m codegenie.autocomplete [--endpoint URL] [--max-tokens N]
"""

from codegenie.autocomplete.service import main

if __name__ == '__main__':
    main()
