"""Configuration classes for kvlgraph components."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CycleBasisConfig:
    """Tunables for spanning-tree path search and KVL verification."""

    # Hard cap on edge expansions per tree path search. None derives the cap
    # from the size of the incidence map.
    max_path_steps: Optional[int] = None

    # Absolute tolerance for treating a cycle's sum of x*P as zero
    verify_tolerance: float = 1e-9

    def path_step_cap(self, incidence_size: int) -> int:
        """Return the expansion cap for a search over `incidence_size` entries.

        A depth-first walk over a tree expands each incidence entry at most
        once, so anything beyond that indicates a corrupted incidence map.
        """
        if self.max_path_steps is not None:
            return self.max_path_steps
        return 2 * incidence_size + 1


# Global configuration instance
CYCLE_CONFIG = CycleBasisConfig()
