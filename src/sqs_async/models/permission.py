"""
Module: permission.py
Description: Permission grant expanded into AddPermission parameters.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

PERMISSION_ACTIONS = (
    "*",
    "SendMessage",
    "ReceiveMessage",
    "DeleteMessage",
    "ChangeMessageVisibility",
    "GetQueueAttributes",
)


class Permission(BaseModel):
    """
    Grant of one action on a queue to one account.

    Several grants sharing a label are sent in one AddPermission call;
    each expands into its own ordinal-suffixed parameters.

    Attributes:
        label: Permission label (shared by all grants of one call)
        account_id: Twelve digit account number being granted access
        action_name: Action being granted, or '*' for all
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    label: str = Field(
        ...,
        min_length=1,
        max_length=80,
        pattern=r"^[A-Za-z0-9_-]+$",
        description="Permission label"
    )
    account_id: str = Field(..., pattern=r"^\d{12}$", description="Grantee account id")
    action_name: str = Field(default="*", description="Granted action")

    @field_validator('action_name')
    @classmethod
    def validate_action_name(cls, v: str) -> str:
        """Validate the action can be granted."""
        if v not in PERMISSION_ACTIONS:
            raise ValueError(f"action_name must be one of: {', '.join(PERMISSION_ACTIONS)}")
        return v

    def to_params(self, ordinal: int) -> Dict[str, str]:
        """Expand into Label, AWSAccountId.N and ActionName.N."""
        if ordinal < 1:
            raise ValueError("ordinal must be >= 1")
        return {
            "Label": self.label,
            f"AWSAccountId.{ordinal}": self.account_id,
            f"ActionName.{ordinal}": self.action_name,
        }
