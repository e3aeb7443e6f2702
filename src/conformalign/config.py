# src/conformalign/config.py

"""
Default settings for correspondence search and superposition.
"""

from dataclasses import dataclass
from typing import Dict

# Upper bound on oracle matches returned for one probe/reference pair
DEFAULT_MAX_MATCHES = 1_000_000

# Candidate counts reaching this log a performance warning; with the default
# match cap this means the oracle result was truncated
LARGE_MATCH_WARNING_THRESHOLD = 1_000_000

# Accepted by the aligner but unused by the closed-form solver
DEFAULT_MAX_ITERATIONS = 50

# Terminal O/N pair hanging off a shared neighbor through one single and one
# double bond (carboxylate, amidinium, nitro-like groups)
SYMMETRIZATION_SMARTS = (
    "[{atomPattern};"
    "$([{atomPattern}]-[*]=[{atomPattern}]),"
    "$([{atomPattern}]=[*]-[{atomPattern}])]~[*]"
)
SYMMETRIZATION_REPLACEMENTS: Dict[str, str] = {"{atomPattern}": "O,N;D1"}


@dataclass(frozen=True)
class AlignmentConfig:
    """Settings shared by the alignment services."""

    reflect: bool = False
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    max_matches: int = DEFAULT_MAX_MATCHES
    symmetrize: bool = True
    show_progress: bool = False
