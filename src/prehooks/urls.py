"""Job output URLs for pre-workflow hook runs."""

from __future__ import annotations

from urllib.parse import quote

from prehooks.config import PreWorkflowHooksConfig


class JobURLGenerator:
    """Builds ``<server_url>/jobs/<hook_id>`` links."""

    def __init__(self, config: PreWorkflowHooksConfig | None = None) -> None:
        self.config = config or PreWorkflowHooksConfig()

    def generate_project_workflow_hook_url(self, hook_id: str) -> str:
        if not hook_id:
            raise ValueError("hook_id must not be empty")
        return f"{self.config.server_url}/jobs/{quote(hook_id, safe='')}"
