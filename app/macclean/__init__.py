"""macclean - find and remove residue left behind by uninstalled macOS apps."""

__version__ = "0.3.0"
