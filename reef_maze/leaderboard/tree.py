"""AVL tree keeping leaderboard records in ranking order.

Better records (``compare_records(new, node) < 0``) go to the left, so an
in-order walk lists the leaderboard best first. Records that tie on every key
may land on either side of each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, cast

from reef_maze.leaderboard.records import LeaderboardRecord, compare_records


@dataclass
class _Node:
    record: LeaderboardRecord
    left: Optional["_Node"] = None
    right: Optional["_Node"] = None
    height: int = 1


def _height(node: Optional[_Node]) -> int:
    return node.height if node is not None else 0


def _update_height(node: _Node) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


def _balance(node: Optional[_Node]) -> int:
    if node is None:
        return 0
    return _height(node.left) - _height(node.right)


def _rotate_right(y: _Node) -> _Node:
    x = cast(_Node, y.left)
    y.left = x.right
    x.right = y
    _update_height(y)
    _update_height(x)
    return x


def _rotate_left(x: _Node) -> _Node:
    y = cast(_Node, x.right)
    x.right = y.left
    y.left = x
    _update_height(x)
    _update_height(y)
    return y


class RankedRecordTree:
    """Height-balanced binary search tree over :class:`LeaderboardRecord`."""

    def __init__(self, records: Iterable[LeaderboardRecord] = ()) -> None:
        self._root: Optional[_Node] = None
        self._size = 0
        for record in records:
            self.insert(record)

    @property
    def height(self) -> int:
        return _height(self._root)

    def insert(self, record: LeaderboardRecord) -> None:
        self._root = self._insert(self._root, record)
        self._size += 1

    def _insert(self, node: Optional[_Node], record: LeaderboardRecord) -> _Node:
        if node is None:
            return _Node(record)

        if compare_records(record, node.record) < 0:
            node.left = self._insert(node.left, record)
        else:
            node.right = self._insert(node.right, record)

        _update_height(node)
        balance = _balance(node)

        if balance > 1:
            if compare_records(record, cast(_Node, node.left).record) >= 0:
                # left-right
                node.left = _rotate_left(node.left)
            return _rotate_right(node)
        if balance < -1:
            if compare_records(record, cast(_Node, node.right).record) < 0:
                # right-left
                node.right = _rotate_right(node.right)
            return _rotate_left(node)
        return node

    def to_list(self) -> List[LeaderboardRecord]:
        """All records in ranking order, best first."""

        return list(self)

    def top(self, k: int) -> List[LeaderboardRecord]:
        if k <= 0:
            return []
        result: List[LeaderboardRecord] = []
        for record in self:
            result.append(record)
            if len(result) == k:
                break
        return result

    def __iter__(self) -> Iterator[LeaderboardRecord]:
        stack: List[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.record
            node = node.right

    def __len__(self) -> int:
        return self._size

    def is_balanced(self) -> bool:
        """Check the AVL invariant and stored heights on every node."""

        def check(node: Optional[_Node]) -> int:
            if node is None:
                return 0
            left = check(node.left)
            right = check(node.right)
            if left < 0 or right < 0 or abs(left - right) > 1:
                return -1
            height = 1 + max(left, right)
            return height if height == node.height else -1

        return check(self._root) >= 0


__all__ = ["RankedRecordTree"]
