"""
Transaction Coordinator - snapshot-based all-or-nothing boundary.

begin() deep-copies every repository collection into a single snapshot
slot, rollback() restores it, commit() drops it.

Known limitations:
- One slot, not a stack. A second begin() before commit()/rollback()
  overwrites the first snapshot, so an outer rollback can no longer
  restore the state the outer begin() saw.
- No isolation. Reads during a transaction see the live, possibly
  mutated collections.
Both are safe only under the single-threaded, non-reentrant call model.
"""

import copy
from typing import Any, Dict, Optional

from eportfolio.kernel.repository import COLLECTIONS, EntityRepository
from eportfolio.logging_config import get_logger

logger = get_logger(__name__)


class TransactionCoordinator:
    """Scoped all-or-nothing boundary over an EntityRepository."""

    def __init__(self, repository: EntityRepository):
        self.repository = repository
        self._snapshot: Optional[Dict[str, Any]] = None

    @property
    def in_transaction(self) -> bool:
        return self._snapshot is not None

    def begin(self) -> None:
        if self._snapshot is not None:
            logger.warning("Transaction begun while another is open; previous snapshot discarded")
        self._snapshot = {
            name: copy.deepcopy(getattr(self.repository, name))
            for name in COLLECTIONS
        }
        logger.debug("Transaction begun")

    def commit(self) -> None:
        self._snapshot = None
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        """Restore the repository to the snapshot. No-op without one."""
        if self._snapshot is None:
            return
        for name, collection in self._snapshot.items():
            setattr(self.repository, name, collection)
        self._snapshot = None
        logger.debug("Transaction rolled back")
