from enum import Enum

# partial_windows flag for windowed()
INCLUDE_PARTIAL_WINDOWS = True
NO_PARTIAL_WINDOWS = False

# send_when flag for filtering stages
SEND_WHEN_TRUE = True
SEND_WHEN_FALSE = False


class SortDirection(Enum):
    ASCENDING = 'ascending'
    DESCENDING = 'descending'


SORT_ASCENDING = SortDirection.ASCENDING
SORT_DESCENDING = SortDirection.DESCENDING
