# rotate_towards/scene/__init__.py
"""Reference scene graph, transforms and scene file loading."""

from rotate_towards.scene.transform import Transform
from rotate_towards.scene.graph import SceneGraph

__all__ = ['Transform', 'SceneGraph']
