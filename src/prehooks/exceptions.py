"""Pre-workflow hook exceptions."""


class PreWorkflowHookError(Exception):
    """Base exception for pre-workflow hook runs."""

    pass


class LockAcquisitionError(PreWorkflowHookError):
    """Working directory lock could not be acquired."""

    pass


class WorkingDirLockedError(LockAcquisitionError):
    """Working directory is already locked by another command."""

    def __init__(self, workspace: str, path: str) -> None:
        super().__init__(
            f"The {workspace} workspace at path {path} is currently locked by "
            "another command that is running for this pull request. "
            "Wait until the previous command is complete and try again."
        )
        self.workspace = workspace
        self.path = path


class WorkspaceCloneError(PreWorkflowHookError):
    """Cloning the pull request's working copy failed."""

    pass


class HookURLGenerationError(PreWorkflowHookError):
    """Progress URL for a hook run could not be generated."""

    def __init__(self, hook_id: str, reason: str) -> None:
        super().__init__(f"Failed to generate URL for hook run {hook_id}: {reason}")
        self.hook_id = hook_id
        self.reason = reason


class HookStatusUpdateError(PreWorkflowHookError):
    """Publishing a pre-workflow hook commit status failed."""

    def __init__(self, hook_description: str, status: str, reason: str) -> None:
        super().__init__(
            f"Unable to update pre workflow hook status to {status} "
            f"for '{hook_description}': {reason}"
        )
        self.hook_description = hook_description
        self.status = status
        self.reason = reason


class HookExecutionError(PreWorkflowHookError):
    """A pre-workflow hook command failed."""

    def __init__(
        self,
        hook_description: str,
        hook_id: str,
        reason: str,
        output: str = "",
        runtime_description: str = "",
    ) -> None:
        super().__init__(f"Pre workflow hook '{hook_description}' failed: {reason}")
        self.hook_description = hook_description
        self.hook_id = hook_id
        self.reason = reason
        self.output = output
        self.runtime_description = runtime_description
