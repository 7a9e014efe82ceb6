"""Entry point for `python -m userjs_updater`."""

from __future__ import annotations

from userjs_updater.cli import main


if __name__ == "__main__":
    main()
