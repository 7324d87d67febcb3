"""Trie-based synthesis of minimal prefix-set regular expressions.

A set of literal strings is inserted character by character into a
trie, which is then folded bottom-up into a single alternation
pattern. Branches that end after one character are merged into a
character class and terminal nodes with continuations become
optional groups, so ``{"sun", "sunw", "org"}`` yields ``(?:org|sunw?)``.
"""

import re
from dataclasses import dataclass, field

from javaimport.errors import CompilationFailed

# Start, word boundary, NUL: no input can satisfy all three.
NEVER_MATCH = r"^\b\x00"


@dataclass
class TrieNode:
    """Node in a character trie.

    Attributes:
        children: Child nodes keyed by a single code point.
        is_terminal: Whether an inserted string ends at this node.
    """

    children: dict[str, "TrieNode"] = field(default_factory=dict)
    is_terminal: bool = False


class TrieCompiler:
    """Compile a set of literal prefixes into one regular expression.

    The synthesized pattern matches any string that starts with one of
    the inserted prefixes. Output is deterministic: children are visited
    in code point order regardless of insertion order.

    Example:
        compiler = TrieCompiler()
        for word in ("public", "private", "pipip.$"):
            compiler.add(word)

        compiler.pattern_text()  # 'p(?:ipip\\.\\$|rivate|ublic)'
    """

    def __init__(self) -> None:
        self._root = TrieNode()
        self._frozen = False

    def add(self, prefix: str) -> None:
        """Insert a literal prefix.

        Args:
            prefix: Non-empty literal string.

        Raises:
            ValueError: If prefix is empty.
            RuntimeError: If compile() was already called.
        """
        if not prefix:
            raise ValueError("Cannot add an empty prefix")
        if self._frozen:
            raise RuntimeError("TrieCompiler cannot be extended after compile()")

        node = self._root
        for ch in prefix:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        node.is_terminal = True

    def pattern_text(self) -> str:
        """Return the synthesized, uncompiled pattern text."""
        if not self._root.children:
            return NEVER_MATCH
        return self._synthesize(self._root)

    def compile(self) -> re.Pattern[str]:
        """Synthesize the pattern and compile it.

        Returns:
            Compiled pattern equivalent to "starts with any inserted prefix".

        Raises:
            CompilationFailed: If the regex engine rejects the pattern text.
        """
        self._frozen = True
        text = self.pattern_text()
        try:
            return re.compile(text)
        except re.error as e:
            raise CompilationFailed(f"Invalid synthesized pattern: {e}", text) from e

    def _synthesize(self, node: TrieNode) -> str:
        if not node.children:
            return ""

        alternatives: list[str] = []
        single_chars: list[str] = []

        for key in sorted(node.children):
            quoted = re.escape(key)
            sub = self._synthesize(node.children[key])
            if sub:
                alternatives.append(quoted + sub)
            else:
                single_chars.append(quoted)

        chars_only = not alternatives
        if len(single_chars) == 1:
            alternatives.append(single_chars[0])
        elif single_chars:
            alternatives.append("[" + "".join(single_chars) + "]")

        if len(alternatives) == 1:
            result = alternatives[0]
        else:
            result = "(?:" + "|".join(alternatives) + ")"

        if node.is_terminal:
            if chars_only:
                result += "?"
            else:
                result = "(?:" + result + ")?"
        return result
