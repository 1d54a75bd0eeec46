r"""
'     ___  ___  ___  _  _
'    / __|| __|/ _ \| || |
'    \__ \| _|| (_) |\_. |
'    |___/|___|\__\_\|__/
'
"""
import logging

# expose the main classes
from .sequence import Sequence, SubSequence, ConstrainedOnceSequence
from .iteration import (
    Iteration,
    IterationState,
    ComputingIteration,
    CursorIteration,
    IteratorCursor,
    build,
    build_linked,
    iteration_of
)

# expose the factory functions
from .factories import (
    from_source,
    empty,
    sequence_of,
    from_list,
    generate,
    from_range,
    repeat,
    iterate,
    from_iterator,
    from_cursor,
    S,
    seq
)

# expose sources and supporting types
from .sources import Source, PreMaterializedList, RestartableSource, SinglePassSource
from .types import Option, Some, Nothing, IndexedValue, ExternalCursor
from .options import INCLUDE_PARTIAL_WINDOWS, NO_PARTIAL_WINDOWS, SortDirection
from .errors import (
    SequenceError,
    ConstructionError,
    AlreadyIteratedError,
    IterationFailedError,
    OutOfBoundsError,
    TypeMismatchError,
    NoSuchElementError
)

# library logging stays silent unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Sequence",
    "SubSequence",
    "ConstrainedOnceSequence",
    "Iteration",
    "IterationState",
    "ComputingIteration",
    "CursorIteration",
    "IteratorCursor",
    "build",
    "build_linked",
    "iteration_of",
    "from_source",
    "empty",
    "sequence_of",
    "from_list",
    "generate",
    "from_range",
    "repeat",
    "iterate",
    "from_iterator",
    "from_cursor",
    "S",
    "seq",
    "Source",
    "PreMaterializedList",
    "RestartableSource",
    "SinglePassSource",
    "Option",
    "Some",
    "Nothing",
    "IndexedValue",
    "ExternalCursor",
    "INCLUDE_PARTIAL_WINDOWS",
    "NO_PARTIAL_WINDOWS",
    "SortDirection",
    "SequenceError",
    "ConstructionError",
    "AlreadyIteratedError",
    "IterationFailedError",
    "OutOfBoundsError",
    "TypeMismatchError",
    "NoSuchElementError"
]
