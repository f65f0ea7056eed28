# rotate_towards/scene/graph.py
"""
Handle-based scene graph.

Objects are integer handles into flat dictionaries; parent links are handles,
never object references. The graph owns local transforms, the cached world
transforms produced by ``propagate()``, parent/child links, rotate directives
and per-tick change tracking.
"""

import logging
from collections import deque

from rotate_towards.scene.transform import Transform
from rotate_towards.utils.errors import RefreshFailed, SceneError

logger = logging.getLogger(__name__)


class SceneGraph:
    """Flat store of transforms with parent links and a propagation pass."""

    def __init__(self):
        self._next_handle = 0
        self.local = {}        # handle -> Transform (relative to parent)
        self.world = {}        # handle -> Transform (cached, global)
        self.parents = {}      # handle -> parent handle
        self.children = {}     # handle -> [child handles]
        self.directives = {}   # handle -> RotateTo
        self.names = {}        # handle -> name
        self._changed = set()

    # ----- Entity lifecycle -----
    def spawn(self, transform=None, parent=None, name=None):
        """
        Create an object and return its handle.

        Args:
            transform (Transform, optional): Local transform, identity if omitted
            parent (int, optional): Parent handle
            name (str, optional): Human-readable name

        Returns:
            int: New handle
        """
        if parent is not None and parent not in self.local:
            raise SceneError(f"Unknown parent handle: {parent}")

        handle = self._next_handle
        self._next_handle += 1

        self.local[handle] = transform.copy() if transform is not None else Transform.identity()
        self.children[handle] = []
        self.names[handle] = name or f"entity{handle}"
        if parent is not None:
            self.parents[handle] = parent
            self.children[parent].append(handle)

        self.world[handle] = self.compute_world_transform(handle)
        self._changed.add(handle)
        logger.debug(f"Spawned {self.names[handle]} as {handle} (parent={parent})")
        return handle

    def despawn(self, handle, recursive=True):
        """
        Remove an object.

        With ``recursive=False`` only the object itself is removed and its
        children keep a parent link to the removed handle, leaving their
        ancestor chain broken until they are re-parented.
        """
        self._require(handle)
        if recursive:
            for child in list(self.children.get(handle, [])):
                self.despawn(child, recursive=True)

        parent = self.parents.pop(handle, None)
        if parent is not None and parent in self.children:
            self.children[parent].remove(handle)

        self.local.pop(handle, None)
        self.world.pop(handle, None)
        self.directives.pop(handle, None)
        self.names.pop(handle, None)
        self._changed.discard(handle)
        # children of a non-recursive despawn keep the dangling link
        self.children.pop(handle, None)

    def set_parent(self, handle, parent):
        """Re-parent ``handle`` under ``parent`` (None detaches to the root)."""
        self._require(handle)
        if parent is not None:
            self._require(parent)
            ancestor = parent
            while ancestor is not None:
                if ancestor == handle:
                    raise SceneError(f"Parenting {handle} under {parent} would create a cycle")
                ancestor = self.parents.get(ancestor)

        old_parent = self.parents.pop(handle, None)
        if old_parent is not None and old_parent in self.children:
            self.children[old_parent].remove(handle)
        if parent is not None:
            self.parents[handle] = parent
            self.children[parent].append(handle)
        self._changed.add(handle)

    def find(self, name):
        """Return the handle with the given name, or None."""
        for handle, entity_name in self.names.items():
            if entity_name == name:
                return handle
        return None

    def name_of(self, handle):
        return self.names.get(handle, str(handle))

    # ----- Directives -----
    def insert_directive(self, handle, directive):
        self._require(handle)
        self.directives[handle] = directive

    def remove_directive(self, handle):
        return self.directives.pop(handle, None)

    def get_directive(self, handle):
        return self.directives.get(handle)

    def iter_rotators(self):
        """
        Yield ``(handle, world, local, directive)`` for every object that has a
        directive, a world transform and a local transform.
        """
        for handle, directive in list(self.directives.items()):
            world = self.world.get(handle)
            local = self.local.get(handle)
            if world is None or local is None:
                continue
            yield handle, world, local, directive

    # ----- Lookups used by the rotation pipeline -----
    def get_world_transform(self, handle):
        """Return the cached world transform, or None if not found."""
        return self.world.get(handle)

    def get_local_transform(self, handle):
        return self.local.get(handle)

    def get_parent(self, handle):
        return self.parents.get(handle)

    def depth(self, handle):
        """Number of ancestors (0 for a root)."""
        depth = 0
        ancestor = self.parents.get(handle)
        while ancestor is not None:
            depth += 1
            ancestor = self.parents.get(ancestor)
        return depth

    def descendants(self, handle):
        """All descendants of ``handle`` in breadth-first order."""
        result = []
        queue = deque(self.children.get(handle, []))
        while queue:
            child = queue.popleft()
            result.append(child)
            queue.extend(self.children.get(child, []))
        return result

    # ----- Mutation with change tracking -----
    def set_local_transform(self, handle, transform):
        self._require(handle)
        self.local[handle] = transform.copy()
        self._changed.add(handle)

    def set_local_rotation(self, handle, rotation):
        self._require(handle)
        self.local[handle].rotation = rotation
        self._changed.add(handle)

    def changed_handles(self):
        """Handles whose local transform was modified since the last ``clear_changes()``."""
        return frozenset(self._changed)

    def clear_changes(self):
        self._changed.clear()

    # ----- World transforms -----
    def compute_world_transform(self, handle):
        """
        Compose local transforms from the root down to ``handle``.

        Raises:
            RefreshFailed: if the object or one of its ancestors is missing
        """
        if handle not in self.local:
            raise RefreshFailed(handle, "entity not found")

        chain = [handle]
        visited = {handle}
        ancestor = self.parents.get(handle)
        while ancestor is not None:
            if ancestor not in self.local:
                raise RefreshFailed(handle, f"ancestor {ancestor} not found")
            if ancestor in visited:
                raise RefreshFailed(handle, f"cycle through {ancestor}")
            visited.add(ancestor)
            chain.append(ancestor)
            ancestor = self.parents.get(ancestor)

        world = self.local[chain[-1]].copy()
        for node in reversed(chain[:-1]):
            world = world.mul_transform(self.local[node])
        return world

    def recompute_world_transform(self, handle):
        """Recompute and cache the world transform of a single object."""
        world = self.compute_world_transform(handle)
        self.world[handle] = world
        return world

    def propagate(self):
        """
        General propagation pass: recompute every world transform from the roots down.

        Objects whose ancestor chain is broken keep their previous cached value.

        Returns:
            int: Number of world transforms updated
        """
        count = 0
        roots = [h for h in self.local if h not in self.parents]
        stack = [(root, None) for root in reversed(roots)]
        while stack:
            handle, parent_world = stack.pop()
            local = self.local[handle]
            world = parent_world.mul_transform(local) if parent_world is not None else local.copy()
            self.world[handle] = world
            count += 1
            for child in reversed(self.children.get(handle, [])):
                stack.append((child, world))

        orphaned = len(self.local) - count
        if orphaned:
            logger.warning(f"{orphaned} object(s) have a broken ancestor chain; world transforms left stale")
        return count

    def _require(self, handle):
        if handle not in self.local:
            raise SceneError(f"Unknown handle: {handle}")

    def __len__(self):
        return len(self.local)
