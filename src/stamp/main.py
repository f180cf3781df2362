"""Unified entry point for stamp.

Installed as both `stamp` and `nid`:

  stamp                  # YYYY-MM-DD-HHMM
  stamp daily            # YYYY-MM-DD
  stamp analog           # YYYY-MM-DD-A1, A2, ... (per-day counter)
  stamp project Roadmap  # P0001 Roadmap (next free number in cwd)
  python -m stamp seq --prefix R --width 3
"""

from stamp.core.config import setup_logging


def main():
    """Main entry point."""
    setup_logging()

    from stamp.interfaces.cli.app import run_cli

    run_cli()


if __name__ == "__main__":
    main()
