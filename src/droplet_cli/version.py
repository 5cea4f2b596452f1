"""Single source of truth for the droplet-cli version string."""

__version__: str = "0.1.0"
