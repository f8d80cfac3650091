"""
Pre-Workflow Hooks

Runs repository-configured shell hooks before pull request commands.
"""

from prehooks.config import PreWorkflowHooksConfig
from prehooks.escaping import escape_args
from prehooks.exceptions import (
    HookExecutionError,
    HookStatusUpdateError,
    HookURLGenerationError,
    LockAcquisitionError,
    PreWorkflowHookError,
    WorkingDirLockedError,
    WorkspaceCloneError,
)
from prehooks.executor import ShellPreWorkflowHookRunner
from prehooks.interfaces import (
    CommitStatusUpdater,
    PreWorkflowHookRunner,
    PreWorkflowHookURLGenerator,
    WorkingDir,
    WorkingDirLocker,
)
from prehooks.locking import InMemoryWorkingDirLocker
from prehooks.models import (
    CommandContext,
    CommandName,
    CommentCommand,
    CommitStatus,
    HookRunResult,
    PullRequest,
    Repo,
    User,
    WorkflowHookCommandContext,
)
from prehooks.repo_config import GlobalConfig, RepoConfig, WorkflowHook
from prehooks.runner import (
    DefaultPreWorkflowHooksCommandRunner,
    PreWorkflowHooksCommandRunner,
)
from prehooks.selector import select_pre_workflow_hooks
from prehooks.urls import JobURLGenerator

__all__ = [
    # Config
    "GlobalConfig",
    "PreWorkflowHooksConfig",
    "RepoConfig",
    "WorkflowHook",
    # Models
    "CommandContext",
    "CommandName",
    "CommentCommand",
    "CommitStatus",
    "HookRunResult",
    "PullRequest",
    "Repo",
    "User",
    "WorkflowHookCommandContext",
    # Interfaces
    "CommitStatusUpdater",
    "PreWorkflowHookRunner",
    "PreWorkflowHookURLGenerator",
    "WorkingDir",
    "WorkingDirLocker",
    # Runner
    "DefaultPreWorkflowHooksCommandRunner",
    "PreWorkflowHooksCommandRunner",
    "select_pre_workflow_hooks",
    "escape_args",
    # Reference collaborators
    "InMemoryWorkingDirLocker",
    "JobURLGenerator",
    "ShellPreWorkflowHookRunner",
    # Exceptions
    "HookExecutionError",
    "HookStatusUpdateError",
    "HookURLGenerationError",
    "LockAcquisitionError",
    "PreWorkflowHookError",
    "WorkingDirLockedError",
    "WorkspaceCloneError",
]
