"""Job browser package.

The package keeps the browsing core free of any UI concerns:
- `models.py` defines the job record and the snapshot handed to a presentation layer.
- `sources/` contains the paginated upstream connector.
- `store.py`, `vocabulary.py` and `filters.py` hold the merge/filter logic.
- `controller.py` wires them into a single fetch-cache-merge-filter pipeline.
"""

from .controller import BrowserController
from .models import BrowserSnapshot, JobRecord, PipelineState

__all__ = ["BrowserController", "BrowserSnapshot", "JobRecord", "PipelineState"]
