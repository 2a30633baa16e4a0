"""Entry point for running the Crab API from the project root.

Configuration such as ``DATABASE_URL``, ``HOST`` and ``PORT`` is read
from the environment; see ``crab_api/app/core/config.py``.

Usage:
    python run.py
"""

from crab_api.__main__ import main


if __name__ == "__main__":
    main()
