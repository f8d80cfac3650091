"""Pre-workflow hooks configuration."""

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings


class PreWorkflowHooksConfig(BaseSettings):
    """Pre-workflow hooks runtime configuration."""

    # Lock scope and clone target
    default_workspace: str = Field(default="default", min_length=1)
    default_repo_rel_dir: str = Field(default=".", min_length=1)

    # Shell resolution for hooks that leave shell/shell_args unset
    default_shell: str = Field(default="sh", min_length=1)
    default_shell_args: str = Field(default="-c", min_length=1)

    # Job progress links
    server_url: str = Field(default="http://localhost:4141")

    # Shell runner
    output_status_filename: str = Field(default=".prehook-output-status", min_length=1)
    hook_timeout_seconds: float | None = Field(default=None, gt=0)

    model_config = ConfigDict(
        env_prefix="PRE_WORKFLOW_HOOKS_",
        case_sensitive=False,
    )

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, v: str) -> str:
        """Validate and normalize server URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")
