"""
Regex generation from a set of words.

Words are stored in a ternary search tree whose sibling lists are kept
balanced as AA-trees. Generating walks the tree depth-first: siblings
without children collapse into a character class, siblings with children
become alternatives, and a word that is a prefix of another word absorbs
the longer one.
"""

from typing import Iterator, Optional, Tuple

DEFAULT_ESCAPE = '\\.[]{}()*+-?^$|'


class TernaryRegexNode:
    """One character in the tree."""

    __slots__ = ('value', 'child', 'left', 'right', 'level')

    def __init__(self, value: str):
        self.value = value
        self.child: Optional['TernaryRegexNode'] = None
        self.left: Optional['TernaryRegexNode'] = None
        self.right: Optional['TernaryRegexNode'] = None
        self.level = 1


# ============================================================================
# AA-tree operations
# ============================================================================

def _skew(t: Optional[TernaryRegexNode]) -> Optional[TernaryRegexNode]:
    if t is None or t.left is None:
        return t
    if t.left.level == t.level:
        left = t.left
        t.left = left.right
        left.right = t
        return left
    return t


def _split(t: Optional[TernaryRegexNode]) -> Optional[TernaryRegexNode]:
    if t is None or t.right is None or t.right.right is None:
        return t
    if t.level == t.right.right.level:
        right = t.right
        t.right = right.left
        right.left = t
        right.level += 1
        return right
    return t


def _insert(x: str, t: Optional[TernaryRegexNode]) -> Tuple[TernaryRegexNode, TernaryRegexNode, bool]:
    """
    Insert ``x`` among the siblings rooted at ``t``.

    Returns:
        Tuple of (new sibling root, node holding x, whether x was new)
    """
    if t is None:
        node = TernaryRegexNode(x)
        return node, node, True
    if x < t.value:
        t.left, target, inserted = _insert(x, t.left)
    elif x > t.value:
        t.right, target, inserted = _insert(x, t.right)
    else:
        return t, t, False
    t = _split(_skew(t))
    return t, target, inserted


def _add(node: Optional[TernaryRegexNode], word: str, offset: int) -> Optional[TernaryRegexNode]:
    if offset >= len(word):
        return None
    node, target, inserted = _insert(word[offset], node)
    # An existing leaf already matches every word it prefixes
    if inserted or target.child is not None:
        target.child = _add(target.child, word, offset + 1)
    return node


def _siblings(node: Optional[TernaryRegexNode]) -> Iterator[TernaryRegexNode]:
    if node is not None:
        yield from _siblings(node.left)
        yield node
        yield from _siblings(node.right)


# ============================================================================
# Generator
# ============================================================================

class TernaryRegexGenerator:
    """
    Collects words and renders them as one regular expression.

    Args:
        or_: Alternation operator
        begin_group: Group opener
        end_group: Group closer
        begin_class: Character class opener
        end_class: Character class closer
        newline: Text inserted after every character that has children
        escape: ASCII characters to prefix with the escape leader

    Raises:
        ValueError: If ``escape`` contains a non-ASCII character
    """

    def __init__(self, or_: str = '|', begin_group: str = '(', end_group: str = ')',
                 begin_class: str = '[', end_class: str = ']', newline: str = '',
                 escape: str = DEFAULT_ESCAPE):
        self.or_ = or_
        self.begin_group = begin_group
        self.end_group = end_group
        self.begin_class = begin_class
        self.end_class = end_class
        self.newline = newline
        for c in escape:
            if ord(c) >= 128:
                raise ValueError(f"only ASCII characters can be escaped: {c!r}")
        self.escaped_characters = frozenset(escape)
        self.escape_character_leader = '\\'
        self.root: Optional[TernaryRegexNode] = None

    @classmethod
    def from_rxop(cls, rxop) -> 'TernaryRegexGenerator':
        """Create a generator from a 7-item operator sequence."""
        if len(rxop) != 7:
            raise ValueError(f"rxop needs 7 items, got {len(rxop)}")
        return cls(*rxop)

    def set_escape_character_leader(self, leader: str) -> None:
        self.escape_character_leader = leader

    def add(self, word: str) -> None:
        if word:
            self.root = _add(self.root, word, 0)

    def _char(self, c: str) -> str:
        if c in self.escaped_characters:
            return self.escape_character_leader + c
        return c

    def _generate_stub(self, node: TernaryRegexNode) -> str:
        siblings = list(_siblings(node))
        brother = len(siblings)
        haschild = sum(1 for n in siblings if n.child is not None)
        nochild = brother - haschild
        grouped = brother > 1 and haschild > 0

        buf = []
        if grouped:
            buf.append(self.begin_group)
        if nochild > 0:
            if nochild > 1:
                buf.append(self.begin_class)
            buf.extend(self._char(n.value) for n in siblings if n.child is None)
            if nochild > 1:
                buf.append(self.end_class)
        if haschild > 0:
            if nochild > 0:
                buf.append(self.or_)
            branches = [
                self._char(n.value) + self.newline + self._generate_stub(n.child)
                for n in siblings if n.child is not None
            ]
            buf.append(self.or_.join(branches))
        if grouped:
            buf.append(self.end_group)
        return ''.join(buf)

    def generate(self) -> str:
        """Render the collected words; empty string when nothing was added."""
        if self.root is None:
            return ''
        return self._generate_stub(self.root)
