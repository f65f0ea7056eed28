# rotate_towards/scene/loader.py
"""Scene loader for YAML/JSON scene definitions."""

import json
import logging
import os
from typing import Dict, List

import yaml

from rotate_towards.scene.graph import SceneGraph
from rotate_towards.scene.transform import Transform
from rotate_towards.systems.directive import RotateTo, UpDirection
from rotate_towards.utils.errors import SceneError
from rotate_towards.utils.quaternion import Quaternion

logger = logging.getLogger(__name__)


class SceneLoader:
    """Loads scenes from YAML or JSON files."""

    @staticmethod
    def load(filepath: str) -> Dict:
        """Load a scene from file.

        Args:
            filepath: Path to scene file (.yaml, .yml or .json)

        Returns:
            dict: ``name``, ``description``, ``graph`` (SceneGraph) and ``config`` overrides
        """
        _, ext = os.path.splitext(filepath)

        with open(filepath, 'r', encoding='utf-8') as f:
            if ext in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            elif ext == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported file format: {ext}")

        scene = SceneLoader.from_dict(data or {})
        logger.info(f"Loaded scene: {scene['name']} ({len(scene['graph'])} entities)")
        return scene

    @staticmethod
    def from_dict(data: Dict) -> Dict:
        """Build a scene from an already-parsed mapping."""
        entities = data.get("entities", [])
        if not isinstance(entities, list):
            raise SceneError("'entities' must be a list")

        graph = SceneGraph()
        handles = SceneLoader._spawn_entities(graph, entities)
        SceneLoader._attach_directives(graph, entities, handles)
        graph.propagate()
        graph.clear_changes()

        return {
            "name": data.get("name", "Untitled Scene"),
            "description": data.get("description", ""),
            "graph": graph,
            "config": data.get("config", {}) or {},
        }

    @staticmethod
    def _spawn_entities(graph: SceneGraph, entities: List[Dict]) -> Dict[str, int]:
        """Spawn entities parents-first regardless of declaration order."""
        handles = {}
        names = [SceneLoader._entity_name(e, i) for i, e in enumerate(entities)]
        if len(set(names)) != len(names):
            raise SceneError("Entity names must be unique")

        pending = list(zip(names, entities))
        while pending:
            remaining = []
            for name, entity in pending:
                parent_name = entity.get("parent")
                if parent_name is not None and parent_name not in handles:
                    remaining.append((name, entity))
                    continue
                parent = handles[parent_name] if parent_name is not None else None
                handles[name] = graph.spawn(SceneLoader._parse_transform(entity), parent=parent, name=name)

            if len(remaining) == len(pending):
                unresolved = ", ".join(f"{n} -> {e.get('parent')}" for n, e in remaining)
                raise SceneError(f"Unknown or cyclic parent references: {unresolved}")
            pending = remaining

        return handles

    @staticmethod
    def _attach_directives(graph: SceneGraph, entities: List[Dict], handles: Dict[str, int]):
        for index, entity in enumerate(entities):
            block = entity.get("rotate_to")
            if not block:
                continue
            name = SceneLoader._entity_name(entity, index)
            target_name = block.get("target")
            if target_name not in handles:
                raise SceneError(f"{name}: unknown rotate_to target {target_name!r}")
            directive = RotateTo(
                target=handles[target_name],
                updir=UpDirection.parse(block.get("updir", "parent")),
                flip_vertical=bool(block.get("flip_vertical", False)),
            )
            graph.insert_directive(handles[name], directive)

    @staticmethod
    def _entity_name(entity: Dict, index: int) -> str:
        return str(entity.get("name", f"entity{index}"))

    @staticmethod
    def _parse_transform(entity: Dict) -> Transform:
        return Transform(
            translation=entity.get("translation", [0.0, 0.0, 0.0]),
            rotation=SceneLoader._parse_rotation(entity.get("rotation")),
            scale=entity.get("scale", [1.0, 1.0, 1.0]),
        )

    @staticmethod
    def _parse_rotation(value) -> Quaternion:
        """Accepts ``{w, x, y, z}``, ``{axis, angle}`` (degrees) or None."""
        if value is None:
            return Quaternion()
        if not isinstance(value, dict):
            raise SceneError(f"Unsupported rotation value: {value!r}")
        if "axis" in value:
            return Quaternion.from_axis_angle(value["axis"], float(value.get("angle", 0.0)))
        return Quaternion(
            value.get("w", 1.0), value.get("x", 0.0), value.get("y", 0.0), value.get("z", 0.0)
        ).normalized()
