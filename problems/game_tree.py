"""
Game tree used by the generic Minimax / alpha-beta pages.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Optional, Tuple

from core.exceptions import TreeValidationError


@dataclass(frozen=True)
class TreeNode:
    """
    Immutable game tree node.

    Leaves carry a value, internal nodes carry children; never both.
    """
    value: Optional[float] = None
    children: Tuple['TreeNode', ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @classmethod
    def leaf(cls, value: float) -> 'TreeNode':
        return cls(value=float(value))

    @classmethod
    def internal(cls, *children: 'TreeNode') -> 'TreeNode':
        return cls(children=tuple(children))

    @classmethod
    def from_dict(cls, data: Any, path: str = '$') -> 'TreeNode':
        """
        Build a tree from parsed JSON, validating every node first.

        A node is a mapping with either a numeric ``value`` or a list
        ``children``.

        Raises:
            TreeValidationError: On the first malformed node, with its path
        """
        if not isinstance(data, dict):
            raise TreeValidationError(
                f"Node must be an object, got {type(data).__name__}", path)

        has_value = 'value' in data and data['value'] is not None
        has_children = 'children' in data and data['children'] is not None

        if has_value:
            value = data['value']
            if isinstance(value, bool) or not isinstance(value, Real):
                raise TreeValidationError(
                    f"'value' must be a number, got {type(value).__name__}", path)
            if has_children:
                raise TreeValidationError(
                    "Node has both 'value' and 'children'; a leaf takes only 'value'", path)
            return cls(value=float(value))

        if has_children:
            children = data['children']
            if not isinstance(children, list):
                raise TreeValidationError(
                    f"'children' must be a list, got {type(children).__name__}", path)
            return cls(children=tuple(
                cls.from_dict(child, f"{path}.children[{i}]")
                for i, child in enumerate(children)
            ))

        raise TreeValidationError("Node needs a numeric 'value' or a 'children' list", path)

    def to_dict(self) -> Dict[str, Any]:
        if self.is_leaf:
            return {'value': self.value}
        return {'children': [child.to_dict() for child in self.children]}

    def depth(self) -> int:
        """Number of edges on the longest root-to-leaf path."""
        if self.is_leaf:
            return 0
        return 1 + max(child.depth() for child in self.children)

    def count_nodes(self) -> int:
        return 1 + sum(child.count_nodes() for child in self.children)


def create_sample_tree() -> TreeNode:
    """Depth-3 textbook tree; its minimax value for MAX at the root is 5."""
    def leaves(*values):
        return [TreeNode.leaf(v) for v in values]

    return TreeNode.internal(
        TreeNode.internal(
            TreeNode.internal(*leaves(3, 5)),
            TreeNode.internal(*leaves(6, 9)),
        ),
        TreeNode.internal(
            TreeNode.internal(*leaves(1, 2)),
            TreeNode.internal(*leaves(0, -1)),
        ),
    )
