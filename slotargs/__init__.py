__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'slotargs'
__author__ = 'slotargs contributors'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

# The library only emits DEBUG records; hosts attach their own handlers.
__import__("logging").getLogger(__name__).addHandler(__import__("logging").NullHandler())

from .arguments import *
from .commands import *
from .faults import *
from .kinds import *
from .outcomes import *
from .policies import *
from .slots import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the arguments
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the value kinds
__all__ += kinds.__all__  # type: ignore[attr-defined]
# Load the exposed API of the outcomes
__all__ += outcomes.__all__  # type: ignore[attr-defined]
# Load the exposed API of the occurrence policies
__all__ += policies.__all__  # type: ignore[attr-defined]
# Load the exposed API of the value slots
__all__ += slots.__all__  # type: ignore[attr-defined]
