"""Selection of the pre-workflow hooks that apply to a repository."""

from __future__ import annotations

from prehooks.repo_config import GlobalConfig, WorkflowHook


def select_pre_workflow_hooks(
    global_cfg: GlobalConfig, base_repo_id: str
) -> list[WorkflowHook]:
    """
    Collect the pre-workflow hooks configured for a repository.

    Every repo entry whose ID matches contributes its hooks, in config order.

    Args:
        global_cfg: Server-side repo configuration
        base_repo_id: ID of the pull request's base repository

    Returns:
        Ordered list of hooks, empty if nothing matches
    """
    hooks: list[WorkflowHook] = []
    for repo in global_cfg.repos:
        if repo.id_matches(base_repo_id) and repo.pre_workflow_hooks:
            hooks.extend(repo.pre_workflow_hooks)
    return hooks
