"""Entry point for running rblint as a module (``python -m rblint``)."""

from __future__ import annotations


def main() -> None:
    """Main entry point for module execution."""
    from rblint.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
