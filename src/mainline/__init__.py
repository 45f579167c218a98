"""mainline — bootstrapping harness for command-line applications.

Declare one entry-point routine, let mainline parse the command line,
and get a well-defined process exit status for whatever the routine
does.
"""

from mainline.cli.app import Main
from mainline.core.options import OptionStore
from mainline.exceptions import ApplicationError, MainlineError
from mainline.version import __version__

__all__: list[str] = [
    "ApplicationError",
    "Main",
    "MainlineError",
    "OptionStore",
    "__version__",
]
