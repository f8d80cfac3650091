"""Server-side repo configuration for pre-workflow hooks.

Loaded from a YAML file of the form::

    repos:
      - id: /.*/
        pre_workflow_hooks:
          - run: ./scripts/setup.sh
            description: Setup
            commands: plan,apply
            shell: bash
            shellArgs: -cv
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)


def _is_regex_id(value: str) -> bool:
    return len(value) >= 2 and value.startswith("/") and value.endswith("/")


class WorkflowHook(BaseModel):
    """A single configured workflow hook."""

    description: str = Field(
        default="",
        validation_alias=AliasChoices(
            "description", "stepDescription", "step_description"
        ),
        description="Display text for the hook's commit status",
    )
    commands: str = Field(
        default="", description="Commands the hook applies to (substring match)"
    )
    shell: str = Field(default="", description="Shell to run the command in")
    shell_args: str = Field(
        default="", alias="shellArgs", description="Arguments passed to the shell"
    )
    run_command: str = Field(alias="run", description="Command text to execute")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("run_command")
    @classmethod
    def validate_run_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("run command must not be empty")
        return v


class RepoConfig(BaseModel):
    """Configuration applied to repos whose ID matches ``id``.

    ``id`` is either an exact repo ID (``github.com/owner/repo``) or a regex
    wrapped in slashes (``/.*/``).
    """

    id: str = Field(description="Exact repo ID or /regex/")
    pre_workflow_hooks: list[WorkflowHook] = Field(default_factory=list)
    post_workflow_hooks: list[WorkflowHook] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v:
            raise ValueError("repo id must not be empty")
        if _is_regex_id(v):
            try:
                re.compile(v[1:-1])
            except re.error as e:
                raise ValueError(f"invalid regex in repo id {v!r}: {e}") from e
        return v

    @field_validator("pre_workflow_hooks", "post_workflow_hooks", mode="before")
    @classmethod
    def default_empty_hooks(cls, v: Any) -> Any:
        return [] if v is None else v

    def id_matches(self, repo_id: str) -> bool:
        """Check whether this entry applies to the given repo ID."""
        if _is_regex_id(self.id):
            return re.search(self.id[1:-1], repo_id) is not None
        return self.id == repo_id


class GlobalConfig(BaseModel):
    """Ordered list of repo configuration entries."""

    repos: list[RepoConfig] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> GlobalConfig:
        """Load repo configuration from a YAML file.

        Raises:
            ValueError: If the file is missing, not valid YAML or fails validation
        """
        if not path.exists():
            raise ValueError(f"Config file not found: {path}")
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

        try:
            return cls.model_validate(data if isinstance(data, dict) else {})
        except ValidationError as e:
            raise ValueError(f"Invalid repo configuration in {path}: {e}") from e
