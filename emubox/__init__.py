"""emubox package root.

Keep this file small so that `import emubox` stays lightweight; the CLI and
the Textual front-end are imported on demand.
"""

__version__ = "1.0.0"

from . import config

__all__ = ["config", "__version__"]
