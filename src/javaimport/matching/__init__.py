"""Prefix-set regular expression synthesis.

Example:
    from javaimport.matching import TrieCompiler

    compiler = TrieCompiler()
    compiler.add("java/lang/")
    compiler.add("javax/")
    pattern = compiler.compile()
"""

from javaimport.matching.trie import NEVER_MATCH, TrieCompiler, TrieNode

__all__ = ["NEVER_MATCH", "TrieCompiler", "TrieNode"]
