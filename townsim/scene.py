"""Loading of scene files that describe entities and their components."""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from townsim.controllers import ControllerManager
from townsim.managers import (
    AIManager,
    DescriptionManager,
    InfoBoxManager,
    MovementManager,
    PositionManager,
)

log = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)


class SceneError(ValueError):
    """The scene file is not valid JSON or lacks an entity list."""


def _strip_comments(text: str) -> str:
    return _COMMENT_RE.sub(lambda m: m.group(1) or " ", text)


class Scene:
    """A set of entities loaded from a JSON scene file."""

    def __init__(self) -> None:
        self.entity_ids: list[int] = []

    def load_from_file(
        self,
        filename: str | os.PathLike,
        position_manager: PositionManager | None = None,
        description_manager: DescriptionManager | None = None,
        controller_manager: ControllerManager | None = None,
        movement_manager: MovementManager | None = None,
        ai_manager: AIManager | None = None,
        info_box_manager: InfoBoxManager | None = None,
    ) -> list[int]:
        """Create the components of every entity in the file.

        Managers given as None are skipped. Entities without an ``id`` are
        ignored. Returns the ids of the loaded entities. Raises OSError if the
        file cannot be read and SceneError if it is not a valid scene.
        """
        text = Path(filename).read_text(encoding="utf-8")
        try:
            data = json.loads(_strip_comments(text))
        except json.JSONDecodeError as exc:
            raise SceneError(f"error parsing scene file: {exc}") from exc

        if not isinstance(data, dict) or "entities" not in data:
            raise SceneError(f"{filename} does not contain 'entities' array")

        loaded: list[int] = []
        for entity in data["entities"]:
            if "id" not in entity:
                continue
            uid = int(entity["id"])
            self._load_entity(
                uid,
                entity,
                position_manager,
                description_manager,
                controller_manager,
                movement_manager,
                ai_manager,
                info_box_manager,
            )
            loaded.append(uid)

        self.entity_ids.extend(loaded)
        return loaded

    @staticmethod
    def _load_entity(
        uid: int,
        entity: dict[str, Any],
        position_manager: PositionManager | None,
        description_manager: DescriptionManager | None,
        controller_manager: ControllerManager | None,
        movement_manager: MovementManager | None,
        ai_manager: AIManager | None,
        info_box_manager: InfoBoxManager | None,
    ) -> None:
        if "description" in entity and description_manager is not None:
            description = entity["description"]
            description_manager.create(uid, description.get("name", ""), description.get("long", ""))

        if "position" in entity and position_manager is not None:
            position = entity["position"]
            position_manager.create(
                uid, float(position.get("x", 0.0)), float(position.get("y", 0.0))
            )

        if "controller" in entity and controller_manager is not None:
            controller_manager.create(uid, entity["controller"].get("type", "unknown"))

        if "movement" in entity and movement_manager is not None:
            movement_manager.create(uid, float(entity["movement"].get("speed", 0.0)))

        if "ai_state" in entity:
            if ai_manager is not None:
                ai_manager.create(uid)
            if info_box_manager is not None:
                name = entity.get("description", {}).get("name", "Unknown")
                info_box_manager.create(uid, f"{name}\nIdle")

        log.debug("Loaded entity %d", uid)