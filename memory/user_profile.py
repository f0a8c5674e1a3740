"""Style profile storage."""

import hashlib
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

_WRITABLE_FIELDS = ("full_name", "location", "style_preferences")


@dataclass
class StyleProfile:
    user_id: str
    full_name: str = ""
    location: Optional[str] = None
    style_preferences: Dict[str, Any] = field(default_factory=dict)


class StyleProfileService:
    """Simple JSON-backed profile store, one file per user."""

    def __init__(self, base_dir: str | Path = "data/profiles") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _profile_path(self, user_id: str) -> Path:
        # Hashed so distinct ids never share a file, whatever characters they contain.
        digest = hashlib.sha256(user_id.encode("utf-8")).hexdigest()
        return self.base_dir / f"{digest}.json"

    def _write(self, profile: StyleProfile) -> None:
        self._profile_path(profile.user_id).write_text(json.dumps(asdict(profile), indent=2))

    def get_profile(self, user_id: str) -> StyleProfile:
        path = self._profile_path(user_id)
        if not path.exists():
            profile = StyleProfile(user_id=user_id)
            self._write(profile)
            return profile

        data = json.loads(path.read_text())
        return StyleProfile(
            user_id=user_id,
            full_name=data.get("full_name", ""),
            location=data.get("location"),
            style_preferences=data.get("style_preferences", {}),
        )

    def update_profile(self, user_id: str, updates: Dict[str, Any]) -> StyleProfile:
        profile = self.get_profile(user_id)
        for key in _WRITABLE_FIELDS:
            if key not in updates or updates[key] is None:
                continue
            if key == "style_preferences":
                profile.style_preferences.update(updates[key])
            else:
                setattr(profile, key, updates[key])
        self._write(profile)
        return profile


__all__ = ["StyleProfile", "StyleProfileService"]
