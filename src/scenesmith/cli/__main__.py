"""Main entry point for scenesmith CLI when run as a module."""

from scenesmith.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
