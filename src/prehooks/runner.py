"""
Pre-Workflow Hooks Command Runner

Runs the repository's pre-workflow hooks before a pull request command is
processed: selects the applicable hooks, locks and clones the working
directory, then runs each hook in order, reporting commit statuses as it goes.
"""

from __future__ import annotations

from typing import Protocol
from uuid import uuid4

from prehooks.config import PreWorkflowHooksConfig
from prehooks.escaping import escape_args
from prehooks.exceptions import (
    HookExecutionError,
    HookStatusUpdateError,
    HookURLGenerationError,
    LockAcquisitionError,
    WorkspaceCloneError,
)
from prehooks.interfaces import (
    CommitStatusUpdater,
    PreWorkflowHookRunner,
    PreWorkflowHookURLGenerator,
    WorkingDir,
    WorkingDirLocker,
)
from prehooks.models import (
    CommandContext,
    CommandName,
    CommentCommand,
    CommitStatus,
    HookRunResult,
    WorkflowHookCommandContext,
)
from prehooks.repo_config import GlobalConfig, WorkflowHook
from prehooks.selector import select_pre_workflow_hooks


class PreWorkflowHooksCommandRunner(Protocol):
    """Protocol for running pre-workflow hooks ahead of a command."""

    async def run_pre_hooks(
        self, ctx: CommandContext, cmd: CommentCommand | None
    ) -> None: ...


class DefaultPreWorkflowHooksCommandRunner:
    """
    First step when processing a pull request command.

    Holds a single working directory lock for the whole hook sequence and
    stops at the first hook that fails.
    """

    def __init__(
        self,
        global_cfg: GlobalConfig,
        working_dir_locker: WorkingDirLocker,
        working_dir: WorkingDir,
        pre_workflow_hook_runner: PreWorkflowHookRunner,
        commit_status_updater: CommitStatusUpdater,
        router: PreWorkflowHookURLGenerator,
        config: PreWorkflowHooksConfig | None = None,
    ) -> None:
        self.global_cfg = global_cfg
        self.working_dir_locker = working_dir_locker
        self.working_dir = working_dir
        self.pre_workflow_hook_runner = pre_workflow_hook_runner
        self.commit_status_updater = commit_status_updater
        self.router = router
        self.config = config or PreWorkflowHooksConfig()

    async def run_pre_hooks(
        self, ctx: CommandContext, cmd: CommentCommand | None
    ) -> None:
        """
        Run pre_workflow_hooks when a pull request command comes in.

        Args:
            ctx: Context of the incoming command
            cmd: Parsed comment command, if any

        Raises:
            LockAcquisitionError: If the working directory is locked
            WorkspaceCloneError: If the pull request could not be cloned
            HookURLGenerationError: If a hook's progress URL could not be built
            HookStatusUpdateError: If a hook's pending/success status failed
            HookExecutionError: If a hook command failed
        """
        pull = ctx.pull
        base_repo = pull.base_repo
        log = ctx.log

        pre_workflow_hooks = select_pre_workflow_hooks(self.global_cfg, base_repo.id)

        # Short circuit any other calls if there are no pre-hooks configured
        if not pre_workflow_hooks:
            return

        log.debug("Pre-hooks configured, running", hook_count=len(pre_workflow_hooks))

        workspace = self.config.default_workspace
        try:
            unlock = await self.working_dir_locker.try_lock(
                base_repo.full_name, pull.num, workspace, self.config.default_repo_rel_dir
            )
        except LockAcquisitionError:
            raise
        except Exception as e:
            raise LockAcquisitionError(str(e)) from e
        log.debug("Got workspace lock", workspace=workspace)

        try:
            try:
                repo_dir, _ = await self.working_dir.clone(ctx.head_repo, pull, workspace)
            except Exception as e:
                raise WorkspaceCloneError(
                    f"Failed to clone {ctx.head_repo.full_name}#{pull.num}: {e}"
                ) from e

            escaped_args = escape_args(cmd.flags) if cmd is not None else []
            command_name = str(cmd.name) if cmd is not None else ""

            # Plan/apply status stays pending while the hooks run
            if cmd is not None and cmd.name in (CommandName.PLAN, CommandName.APPLY):
                try:
                    await self.commit_status_updater.update_combined(
                        base_repo, pull, CommitStatus.PENDING, command_name
                    )
                except Exception as e:
                    log.warning(
                        "Unable to update commit status",
                        command_name=command_name,
                        error=str(e),
                    )

            hook_ctx = WorkflowHookCommandContext(
                base_repo=base_repo,
                head_repo=ctx.head_repo,
                pull=pull,
                user=ctx.user,
                log=log,
                verbose=False,
                escaped_comment_args=escaped_args,
                command_name=command_name,
            )
            await self._run_hooks(hook_ctx, pre_workflow_hooks, repo_dir)
        finally:
            try:
                unlock()
                log.debug("Released workspace lock", workspace=workspace)
            except Exception as e:
                log.warning(
                    "Unable to release workspace lock",
                    workspace=workspace,
                    error=str(e),
                )

    async def _run_hooks(
        self,
        ctx: WorkflowHookCommandContext,
        pre_workflow_hooks: list[WorkflowHook],
        repo_dir: str,
    ) -> None:
        """Run hooks in order, raising on the first failure."""
        log = ctx.log

        for i, hook in enumerate(pre_workflow_hooks):
            hook_description = hook.description or f"Pre workflow hook #{i}"

            log.debug(
                "Processing pre workflow hook",
                hook_description=hook_description,
                command_name=ctx.command_name,
                target_commands=hook.commands,
            )
            if hook.commands and (
                not ctx.command_name or ctx.command_name not in hook.commands
            ):
                log.debug(
                    "Skipping pre workflow hook, command not in target commands",
                    hook_description=hook_description,
                    command_name=ctx.command_name,
                    target_commands=hook.commands,
                )
                continue

            hook_ctx = ctx.model_copy(update={"hook_id": str(uuid4())})
            shell = hook.shell
            if not shell:
                shell = self.config.default_shell
                log.debug("Setting shell to default", shell=shell)
            shell_args = hook.shell_args
            if not shell_args:
                shell_args = self.config.default_shell_args
                log.debug("Setting shell args to default", shell_args=shell_args)

            log.info(
                "Running pre workflow hook",
                hook_description=hook_description,
                hook_id=hook_ctx.hook_id,
            )

            try:
                url = self.router.generate_project_workflow_hook_url(hook_ctx.hook_id)
            except Exception as e:
                raise HookURLGenerationError(hook_ctx.hook_id, str(e)) from e

            await self._update_status(
                hook_ctx, CommitStatus.PENDING, hook_description, "", url
            )

            result = await self._run_hook(hook_ctx, hook, shell, shell_args, repo_dir)

            if not result.success:
                log.error(
                    "Pre workflow hook failed",
                    hook_description=hook_description,
                    hook_id=hook_ctx.hook_id,
                    error=result.error,
                )
                try:
                    await self._update_status(
                        hook_ctx,
                        CommitStatus.FAILED,
                        hook_description,
                        result.runtime_description,
                        url,
                    )
                except HookStatusUpdateError:
                    pass  # logged in _update_status
                raise HookExecutionError(
                    hook_description,
                    hook_ctx.hook_id,
                    result.error or "unknown error",
                    output=result.output,
                    runtime_description=result.runtime_description,
                )

            await self._update_status(
                hook_ctx,
                CommitStatus.SUCCESS,
                hook_description,
                result.runtime_description,
                url,
            )
            log.info(
                "Pre workflow hook completed",
                hook_description=hook_description,
                hook_id=hook_ctx.hook_id,
            )

    async def _run_hook(
        self,
        ctx: WorkflowHookCommandContext,
        hook: WorkflowHook,
        shell: str,
        shell_args: str,
        repo_dir: str,
    ) -> HookRunResult:
        try:
            return await self.pre_workflow_hook_runner.run(
                ctx, hook.run_command, shell, shell_args, repo_dir
            )
        except Exception as e:
            return HookRunResult(error=str(e) or type(e).__name__)

    async def _update_status(
        self,
        ctx: WorkflowHookCommandContext,
        status: CommitStatus,
        hook_description: str,
        runtime_description: str,
        url: str,
    ) -> None:
        try:
            await self.commit_status_updater.update_pre_workflow_hook(
                ctx.pull, status, hook_description, runtime_description, url
            )
        except Exception as e:
            ctx.log.warning(
                "Unable to update pre workflow hook status",
                hook_description=hook_description,
                status=status.value,
                error=str(e),
            )
            raise HookStatusUpdateError(hook_description, status.value, str(e)) from e
