"""Allow running with ``python -m meme_shorts``."""

from .cli import main

if __name__ == "__main__":
    main()
