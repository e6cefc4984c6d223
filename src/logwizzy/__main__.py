"""Module entrypoint.

Allows:
    python -m logwizzy
"""

from __future__ import annotations

from logwizzy.cli import main

if __name__ == "__main__":
    main()
