"""
Collaborator Protocols for the Pre-Workflow Hooks Coordinator

The coordinator only talks to the outside world through these interfaces:
- WorkingDirLocker: exclusive access to a pull request's working directory
- WorkingDir: materializes the pull request's source branch on disk
- CommitStatusUpdater: publishes commit statuses on the VCS host
- PreWorkflowHookRunner: runs one hook command in a shell
- PreWorkflowHookURLGenerator: builds links to a hook run's output
"""

from __future__ import annotations

from typing import Callable, Protocol

from prehooks.models import (
    CommitStatus,
    HookRunResult,
    PullRequest,
    Repo,
    WorkflowHookCommandContext,
)


class WorkingDirLocker(Protocol):
    """Protocol for working directory locks."""

    async def try_lock(
        self, repo_full_name: str, pull_num: int, workspace: str, path: str
    ) -> Callable[[], None]:
        """
        Try to lock the working directory for a pull request.

        Args:
            repo_full_name: Base repository full name
            pull_num: Pull request number
            workspace: Logical workspace name
            path: Directory relative to the repo root

        Returns:
            Callable that releases the lock

        Raises:
            LockAcquisitionError: If the lock is held elsewhere
        """
        ...


class WorkingDir(Protocol):
    """Protocol for pull request working copies."""

    async def clone(
        self, head_repo: Repo, pull: PullRequest, workspace: str
    ) -> tuple[str, bool]:
        """
        Clone (or reuse) the pull request's source branch.

        Returns:
            Tuple of (directory path, whether the clone has diverged from base)
        """
        ...


class CommitStatusUpdater(Protocol):
    """Protocol for commit status publication."""

    async def update_combined(
        self,
        repo: Repo,
        pull: PullRequest,
        status: CommitStatus,
        command_name: str,
    ) -> None:
        """Set the combined status for a command (plan/apply) on the pull request."""
        ...

    async def update_pre_workflow_hook(
        self,
        pull: PullRequest,
        status: CommitStatus,
        hook_description: str,
        runtime_description: str,
        url: str,
    ) -> None:
        """Set the status of a single pre-workflow hook on the pull request."""
        ...


class PreWorkflowHookRunner(Protocol):
    """Protocol for hook command execution."""

    async def run(
        self,
        ctx: WorkflowHookCommandContext,
        command: str,
        shell: str,
        shell_args: str,
        path: str,
    ) -> HookRunResult:
        """
        Run a hook command.

        The result always carries a runtime description, including on failure.
        """
        ...


class PreWorkflowHookURLGenerator(Protocol):
    """Protocol for hook progress URLs."""

    def generate_project_workflow_hook_url(self, hook_id: str) -> str:
        """Return a URL where the output of hook run ``hook_id`` can be viewed."""
        ...
