from typing import Any
from collections.abc import Callable


# Type aliases for stored records
type Record = dict[str, Any]
type RecordMapping = dict[str, Record]
type RecordPredicate = Callable[[str, Record], bool]

# Type aliases for configuration documents
type AppConfig = dict[str, Any]
