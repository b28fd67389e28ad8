"""Guided remediation sub-flows.

Each flow pairs a ``needs_*`` / ``has_*`` predicate with an ``auto_*``
procedure that is a no-op when nothing needs fixing and returns a
distinct ``*_DECLINED`` code when the user says no.
"""

from publishflow.remediation.commit import auto_commit, generate_commit_message, has_pending_changes
from publishflow.remediation.init import auto_initialize, needs_git_init
from publishflow.remediation.manifest import (
    auto_fix_manifest,
    find_entry_file,
    suggest_package_name,
)
from publishflow.remediation.remote import (
    auto_create_remote,
    needs_remote_setup,
    validate_repo_name,
)
from publishflow.remediation.token import has_registry_token, mask_token, verify_registry_token

__all__ = [
    "auto_commit",
    "auto_create_remote",
    "auto_fix_manifest",
    "auto_initialize",
    "find_entry_file",
    "generate_commit_message",
    "has_pending_changes",
    "has_registry_token",
    "mask_token",
    "needs_git_init",
    "needs_remote_setup",
    "suggest_package_name",
    "validate_repo_name",
    "verify_registry_token",
]
