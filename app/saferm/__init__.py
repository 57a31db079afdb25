"""saferm - move files to the trash instead of destroying them."""

__version__ = "0.3.0"
