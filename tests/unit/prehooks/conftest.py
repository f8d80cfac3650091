"""
Pytest configuration for pre-workflow hook tests.

Provides recording fakes for the coordinator's collaborators. All fakes append
to a shared call log so tests can assert on cross-collaborator ordering.
"""

from __future__ import annotations

from typing import Any

import pytest

from prehooks.models import (
    CommandContext,
    CommitStatus,
    HookRunResult,
    PullRequest,
    Repo,
    User,
    WorkflowHookCommandContext,
)
from prehooks.repo_config import GlobalConfig, RepoConfig, WorkflowHook
from prehooks.runner import DefaultPreWorkflowHooksCommandRunner


class FakeLocker:
    def __init__(self, calls: list[tuple], error: Exception | None = None):
        self.calls = calls
        self.error = error
        self.unlock_error: Exception | None = None
        self.lock_calls: list[tuple] = []
        self.unlock_count = 0

    async def try_lock(self, repo_full_name, pull_num, workspace, path):
        self.lock_calls.append((repo_full_name, pull_num, workspace, path))
        self.calls.append(("lock", repo_full_name, pull_num, workspace, path))
        if self.error:
            raise self.error

        def unlock() -> None:
            self.unlock_count += 1
            self.calls.append(("unlock",))
            if self.unlock_error:
                raise self.unlock_error

        return unlock


class FakeWorkingDir:
    def __init__(self, calls: list[tuple], repo_dir: str = "/tmp/repo"):
        self.calls = calls
        self.repo_dir = repo_dir
        self.error: Exception | None = None
        self.clone_calls: list[tuple] = []

    async def clone(self, head_repo, pull, workspace):
        self.clone_calls.append((head_repo, pull, workspace))
        self.calls.append(("clone", head_repo.full_name, workspace))
        if self.error:
            raise self.error
        return self.repo_dir, False


class FakeStatusUpdater:
    def __init__(self, calls: list[tuple]):
        self.calls = calls
        self.combined_error: Exception | None = None
        # Maps CommitStatus -> exception raised for hook status updates
        self.hook_errors: dict[CommitStatus, Exception] = {}
        self.combined_updates: list[tuple] = []
        self.hook_updates: list[tuple] = []

    async def update_combined(self, repo, pull, status, command_name):
        self.combined_updates.append((repo.full_name, pull.num, status, command_name))
        self.calls.append(("combined", status, command_name))
        if self.combined_error:
            raise self.combined_error

    async def update_pre_workflow_hook(
        self, pull, status, hook_description, runtime_description, url
    ):
        self.hook_updates.append((status, hook_description, runtime_description, url))
        self.calls.append(("status", status, hook_description))
        if status in self.hook_errors:
            raise self.hook_errors[status]


class FakeHookRunner:
    def __init__(self, calls: list[tuple]):
        self.calls = calls
        # Maps run command -> HookRunResult (default: success)
        self.results: dict[str, HookRunResult] = {}
        self.run_calls: list[dict[str, Any]] = []

    async def run(
        self,
        ctx: WorkflowHookCommandContext,
        command: str,
        shell: str,
        shell_args: str,
        path: str,
    ) -> HookRunResult:
        self.run_calls.append(
            {
                "ctx": ctx,
                "command": command,
                "shell": shell,
                "shell_args": shell_args,
                "path": path,
            }
        )
        self.calls.append(("run", command))
        return self.results.get(
            command, HookRunResult(output="ok", runtime_description=f"{command} done")
        )


class FakeRouter:
    def __init__(self, calls: list[tuple]):
        self.calls = calls
        self.hook_ids: list[str] = []
        self.fail_on_call: int | None = None

    def generate_project_workflow_hook_url(self, hook_id: str) -> str:
        self.hook_ids.append(hook_id)
        self.calls.append(("url", hook_id))
        if self.fail_on_call is not None and len(self.hook_ids) == self.fail_on_call:
            raise RuntimeError("router unavailable")
        return f"https://atlantis.example.com/jobs/{hook_id}"


@pytest.fixture
def base_repo():
    return Repo(full_name="runatlantis/atlantis", owner="runatlantis", name="atlantis")


@pytest.fixture
def head_repo():
    return Repo(full_name="contributor/atlantis", owner="contributor", name="atlantis")


@pytest.fixture
def pull(base_repo):
    return PullRequest(
        num=42,
        head_commit="abc123",
        head_branch="feature",
        base_branch="main",
        author="contributor",
        base_repo=base_repo,
    )


@pytest.fixture
def command_ctx(head_repo, pull):
    return CommandContext(head_repo=head_repo, pull=pull, user=User(username="lkysow"))


@pytest.fixture
def calls() -> list[tuple]:
    return []


@pytest.fixture
def locker(calls):
    return FakeLocker(calls)


@pytest.fixture
def working_dir(calls):
    return FakeWorkingDir(calls)


@pytest.fixture
def status_updater(calls):
    return FakeStatusUpdater(calls)


@pytest.fixture
def hook_runner(calls):
    return FakeHookRunner(calls)


@pytest.fixture
def router(calls):
    return FakeRouter(calls)


@pytest.fixture
def make_runner(locker, working_dir, status_updater, hook_runner, router):
    """Build a coordinator for the given hooks, configured for every repo."""

    def _make(hooks: list[WorkflowHook], repo_id: str = "/.*/"):
        global_cfg = GlobalConfig(
            repos=[RepoConfig(id=repo_id, pre_workflow_hooks=hooks)]
        )
        return DefaultPreWorkflowHooksCommandRunner(
            global_cfg=global_cfg,
            working_dir_locker=locker,
            working_dir=working_dir,
            pre_workflow_hook_runner=hook_runner,
            commit_status_updater=status_updater,
            router=router,
        )

    return _make
