"""
Pre-Workflow Hook Executor

Runs hook commands in a shell inside the pull request's working directory.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import shlex
from pathlib import Path

import structlog

from prehooks.config import PreWorkflowHooksConfig
from prehooks.models import HookRunResult, WorkflowHookCommandContext


class ShellPreWorkflowHookRunner:
    """
    Executes pre-workflow hook commands as shell subprocesses.

    Pull request details are exported to the hook as environment variables.
    A hook can set its commit status text by writing to ``$OUTPUT_STATUS_FILE``.
    """

    def __init__(self, config: PreWorkflowHooksConfig | None = None):
        self.config = config or PreWorkflowHooksConfig()
        self.logger = structlog.get_logger()

    def build_env(
        self, ctx: WorkflowHookCommandContext, path: str, status_file: Path
    ) -> dict[str, str]:
        """Build the hook environment: the server's environment plus PR details."""
        env = dict(os.environ)
        env.update(
            {
                "BASE_BRANCH_NAME": ctx.pull.base_branch,
                "BASE_REPO_NAME": ctx.base_repo.name,
                "BASE_REPO_OWNER": ctx.base_repo.owner,
                "COMMENT_ARGS": ",".join(ctx.escaped_comment_args),
                "DIR": path,
                "HEAD_BRANCH_NAME": ctx.pull.head_branch,
                "HEAD_COMMIT": ctx.pull.head_commit,
                "HEAD_REPO_NAME": ctx.head_repo.name,
                "HEAD_REPO_OWNER": ctx.head_repo.owner,
                "PULL_AUTHOR": ctx.pull.author,
                "PULL_NUM": str(ctx.pull.num),
                "PULL_URL": ctx.pull.url,
                "USER_NAME": ctx.user.username,
                "COMMAND_NAME": ctx.command_name,
                "OUTPUT_STATUS_FILE": str(status_file),
            }
        )
        return env

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

        Args:
            ctx: Hook run context
            command: Command text passed to the shell
            shell: Shell executable, e.g. "sh"
            shell_args: Shell arguments preceding the command, e.g. "-c"
            path: Working directory

        Returns:
            Run result; ``error`` is set if the command could not be run,
            exited non-zero or timed out
        """
        status_file = Path(path) / self.config.output_status_filename
        status_file.unlink(missing_ok=True)

        env = self.build_env(ctx, path, status_file)

        log = ctx.log.bind(hook_id=ctx.hook_id)
        log.debug("Running hook command", shell=shell, shell_args=shell_args, path=path)

        error: str | None = None
        output = ""
        try:
            cmd_parts = [shell, *shlex.split(shell_args), command]
            process = await asyncio.create_subprocess_exec(
                *cmd_parts,
                cwd=path,
                env=env,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except (OSError, ValueError) as e:
            error = str(e)
        else:
            try:
                stdout, _ = await asyncio.wait_for(
                    process.communicate(), timeout=self.config.hook_timeout_seconds
                )
                output = stdout.decode(errors="replace") if stdout else ""
                if process.returncode != 0:
                    error = f"exit status {process.returncode}"
            except asyncio.TimeoutError:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                await process.wait()
                error = f"timed out after {self.config.hook_timeout_seconds}s"

        runtime_description = self._read_status_file(status_file)

        if error is not None:
            message = (
                f"{error}: running '{shell} {shell_args} {command}' in '{path}': \n{output}"
            )
            log.error("Hook command failed", error=error)
            return HookRunResult(
                output=output, runtime_description=runtime_description, error=message
            )

        log.info("Hook command succeeded", path=path)
        return HookRunResult(output=output, runtime_description=runtime_description)

    def _read_status_file(self, status_file: Path) -> str:
        if not status_file.exists():
            return ""
        try:
            return status_file.read_text().strip()
        except OSError as e:
            self.logger.warning(
                "Unable to read output status file",
                status_file=str(status_file),
                error=str(e),
            )
            return ""
