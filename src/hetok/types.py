"""
Core types for tokenization.
"""

from typing import TypeAlias

Token: TypeAlias = str
TokenId: TypeAlias = int
MergeRule: TypeAlias = tuple[Token, Token]
Symbols: TypeAlias = list[Token]
VocabPayload: TypeAlias = dict[str, object]
