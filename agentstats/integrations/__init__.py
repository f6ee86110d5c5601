"""
agentstats integrations.

External tool wrappers:
- git_ops: Git metadata via the git CLI
"""

from agentstats.integrations.git_ops import GitOps

__all__ = [
    "GitOps",
]
