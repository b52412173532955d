"""Host-side presentation registry and input keys.

The game core never touches a scene graph. It asks the :class:`Scene` for
opaque integer handles when it creates objects and only ever hands those
handles back to move them or change their text.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from grace_snake.grid import Anchor


class Key(enum.Enum):
    """Keys the game core reacts to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    W = "w"
    A = "a"
    S = "s"
    D = "d"
    SPACE = "space"


def parse_key(name: str) -> Key | None:
    """Map a key name (case-insensitive) to a :class:`Key`, or ``None``."""
    try:
        return Key(name.strip().lower())
    except ValueError:
        return None


class NodeKind(str, enum.Enum):
    SEGMENT = "segment"
    FOOD = "food"
    TEXT = "text"


@dataclass
class Node:
    """Metadata the host keeps for one spawned object."""

    kind: NodeKind
    anchor: Anchor
    text: str | None = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "anchor": list(self.anchor),
            "text": self.text,
        }


class Scene:
    """Handle-to-metadata mapping owned by the presentation layer."""

    def __init__(self) -> None:
        self._nodes: dict[int, Node] = {}
        self._next_handle = 0

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, handle: object) -> bool:
        return handle in self._nodes

    def spawn(
        self, kind: NodeKind, anchor: Anchor, text: str | None = None,
    ) -> int:
        """Create a node and return its handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._nodes[handle] = Node(kind, anchor, text)
        return handle

    def despawn(self, handle: int) -> None:
        del self._nodes[handle]

    def get(self, handle: int) -> Node:
        return self._nodes[handle]

    def place(self, handle: int, anchor: Anchor) -> None:
        self._nodes[handle].anchor = anchor

    def set_text(self, handle: int, text: str) -> None:
        self._nodes[handle].text = text

    def announce(self, line: str) -> None:
        """Report a line on the operator console."""
        print(line)  # noqa: T201

    def snapshot(self) -> dict:
        """Serialize all nodes keyed by handle."""
        return {str(h): node.to_dict() for h, node in self._nodes.items()}
