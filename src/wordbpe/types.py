"""
Core types for word-level BPE.
"""

from collections import Counter
from typing import TypeAlias

Symbol: TypeAlias = str
Word: TypeAlias = tuple[Symbol, ...]
SymbolPair: TypeAlias = tuple[Symbol, Symbol]
Corpus: TypeAlias = Counter[Word]
TokenizerDictionary: TypeAlias = dict[str, list[Symbol]]
