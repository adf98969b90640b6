"""Action payload and result types shared by the dispatcher, CLI and store."""

from dataclasses import asdict, dataclass
from typing import Optional

from workbench.errors import ValidationError

# camelCase keys used by the JSON action boundary -> payload attribute names
_PAYLOAD_KEYS = {
    "projectPath": "project_path",
    "prompt": "prompt",
    "spec": "spec",
    "snapshotName": "snapshot_name",
    "provider": "provider",
    "learningMode": "learning_mode",
    "planDraft": "plan_draft",
    "approvedPlan": "approved_plan",
}


@dataclass
class ActionPayload:
    """Inputs for one action. Fields an action does not use are ignored."""

    project_path: str
    prompt: str = ""
    spec: str = ""
    snapshot_name: str = ""
    provider: str = ""
    learning_mode: Optional[bool] = None
    plan_draft: str = ""
    approved_plan: str = ""

    @classmethod
    def from_dict(cls, data):
        """Build a payload from a camelCase (or snake_case) mapping."""
        kwargs = {}
        for key, value in data.items():
            attr = _PAYLOAD_KEYS.get(key, key)
            if attr not in cls.__dataclass_fields__:
                continue
            if value is None:
                continue
            expected = bool if attr == "learning_mode" else str
            if not isinstance(value, expected):
                raise ValidationError(
                    f"{key} must be a {'boolean' if expected is bool else 'string'}, "
                    f"got {type(value).__name__}"
                )
            kwargs[attr] = value
        if "project_path" not in kwargs:
            raise ValidationError("projectPath is required")
        return cls(**kwargs)


@dataclass
class ActionResult:
    success: bool
    output: str

    def to_dict(self):
        return asdict(self)
