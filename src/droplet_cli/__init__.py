"""droplet-cli — upload, build, list and launch droplets.

Packages local application bits into tar archives and hands them to a
remote droplet store, with a strict layered architecture.
"""

from droplet_cli.version import __version__

__all__: list[str] = ["__version__"]
