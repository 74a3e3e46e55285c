#!/usr/bin/env python3
"""Entry point for rblint CLI when run as python -m rblint.cli."""

if __name__ == "__main__":
    from rblint.cli.main import main

    main()
