"""
CPU Scheduling Policies
"""

from .policies import (PolicyKind, POLICY_INFO, parse_policy, get_candidates,
                       select_next_process)

__all__ = [
    'PolicyKind',
    'POLICY_INFO',
    'parse_policy',
    'get_candidates',
    'select_next_process'
]
