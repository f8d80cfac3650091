"""
Pre-Workflow Hook Models

Pull request, command and execution context models consumed by the
pre-workflow hooks coordinator.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import structlog
from pydantic import BaseModel, Field


class CommandName(str, Enum):
    """Commands that can be issued against a pull request."""

    APPLY = "apply"
    PLAN = "plan"
    UNLOCK = "unlock"
    POLICY_CHECK = "policy_check"
    APPROVE_POLICIES = "approve_policies"
    VERSION = "version"
    IMPORT = "import"
    STATE = "state"

    def __str__(self) -> str:
        return self.value


class CommitStatus(str, Enum):
    """Commit status states reported to the VCS host."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class Repo(BaseModel):
    """A VCS repository."""

    full_name: str = Field(description="Owner and name, e.g. 'owner/repo'")
    owner: str = Field(description="Repository owner")
    name: str = Field(description="Repository name")
    hostname: str = Field(default="github.com", description="VCS hostname")
    clone_url: str = Field(default="", description="Authenticated clone URL")

    model_config = {"frozen": True}

    @property
    def id(self) -> str:
        """Unique repository identifier, e.g. 'github.com/owner/repo'."""
        return f"{self.hostname}/{self.full_name}"


class User(BaseModel):
    """A VCS user."""

    username: str = Field(description="VCS username")

    model_config = {"frozen": True}


class PullRequest(BaseModel):
    """A pull (or merge) request."""

    num: int = Field(description="Pull request number")
    head_commit: str = Field(default="", description="Head commit SHA")
    url: str = Field(default="", description="Web URL of the pull request")
    head_branch: str = Field(default="", description="Source branch")
    base_branch: str = Field(default="", description="Target branch")
    author: str = Field(default="", description="Pull request author")
    state: str = Field(default="open", description="Pull request state")
    base_repo: Repo = Field(description="Repository the pull request targets")

    model_config = {"frozen": True}


class CommentCommand(BaseModel):
    """A command parsed from a pull request comment."""

    name: CommandName = Field(description="Command name")
    flags: list[str] = Field(
        default_factory=list, description="Extra arguments passed after '--'"
    )
    repo_rel_dir: str = Field(default="", description="Target directory")
    workspace: str = Field(default="", description="Target workspace")
    project_name: str = Field(default="", description="Target project")
    verbose: bool = Field(default=False, description="Verbose output requested")


class CommandContext(BaseModel):
    """Context of an incoming pull request command."""

    head_repo: Repo = Field(description="Repository the pull request comes from")
    pull: PullRequest = Field(description="Pull request being processed")
    user: User = Field(description="User who issued the command")
    log: Any = Field(
        default_factory=structlog.get_logger, description="Request-scoped logger"
    )

    @property
    def base_repo(self) -> Repo:
        return self.pull.base_repo


class WorkflowHookCommandContext(BaseModel):
    """Context passed to the hook runner and status updates for one hook run."""

    base_repo: Repo
    head_repo: Repo
    pull: PullRequest
    user: User
    log: Any = Field(default_factory=structlog.get_logger)
    verbose: bool = False
    escaped_comment_args: list[str] = Field(default_factory=list)
    command_name: str = ""
    hook_id: str = ""


class HookRunResult(BaseModel):
    """Result of running a single hook command."""

    output: str = Field(default="", description="Combined stdout/stderr")
    runtime_description: str = Field(
        default="", description="Status text produced by the hook run"
    )
    error: str | None = Field(None, description="Error message if the hook failed")

    @property
    def success(self) -> bool:
        return self.error is None
