"""
Testing utilities for the search controller and its views.

Unit tests drive SearchController with a VirtualScheduler, a
ScriptedSearchService and a RecordingObserver; no terminal and no network.

```python
from incsearch.ui.testing import RecordingObserver, ScriptedSearchService, VirtualScheduler, drain
```
"""

from .mocks import (
    RecordingObserver,
    ScriptedSearchService,
    SearchCall,
    VirtualScheduler,
    VirtualTimer,
    drain,
    wait_for_condition,
)

__all__ = [
    "RecordingObserver",
    "ScriptedSearchService",
    "SearchCall",
    "VirtualScheduler",
    "VirtualTimer",
    "drain",
    "wait_for_condition",
]
