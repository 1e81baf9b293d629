"""Start the demo viewer with ``python -m gauge_paths``."""

from . import main

if __name__ == "__main__":  # pragma: no cover
    main()
