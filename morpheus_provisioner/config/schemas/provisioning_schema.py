"""Provisioning behaviour configuration schema."""
from typing import List
from pydantic import BaseModel, Field


class ProvisioningConfig(BaseModel):
    """Instance lifecycle settings."""

    force_delete: bool = Field(False, description="Send force=true when deleting instances")
    wait_for_status: bool = Field(False, description="Poll a created instance until it settles")
    pending_statuses: List[str] = Field(
        default_factory=lambda: ["provisioning", "starting", "stopping", "pending"],
        description="Statuses that keep the poller waiting"
    )
    target_statuses: List[str] = Field(
        default_factory=lambda: ["running", "failed", "warning", "denied", "cancelled", "suspended"],
        description="Statuses that end the wait"
    )
    status_timeout_seconds: float = Field(3 * 60 * 60, description="Give up waiting after this many seconds")
    status_poll_interval_seconds: float = Field(60, description="Seconds between status polls")
