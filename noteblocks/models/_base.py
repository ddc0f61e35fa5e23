from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict

from ..utils import underscore_to_camelcase


_EXTRA_MODES = ("allow", "forbid", "ignore")


def _env_extra_mode(default: str = "ignore") -> str:
    """How note snapshots treat unknown keys (``NOTEBLOCKS_EXTRA``).

    Unrecognized values fall back to ``default`` so a typo never makes loading
    stricter.
    """
    raw = os.getenv("NOTEBLOCKS_EXTRA", "").strip().lower()
    return raw if raw in _EXTRA_MODES else default


_EXTRA = _env_extra_mode()


class NoteModel(BaseModel):
    """
    Project-wide base model.

    Field names are snake_case in Python and camelCase on the wire. Unknown
    keys are ignored by default; switch at runtime by setting an env var
    before import:
      export NOTEBLOCKS_EXTRA=forbid   # or allow/ignore
    """

    model_config = ConfigDict(
        alias_generator=underscore_to_camelcase,
        populate_by_name=True,
        extra=_EXTRA,  # 'forbid' | 'allow' | 'ignore'
    )

    def to_wire(self) -> dict:
        """Dump using camelCase wire names, dropping unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["NoteModel", "_env_extra_mode"]
