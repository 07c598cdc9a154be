from .ranges import CodeContextRange
from .tokens import Token, TokenKind

__all__ = ["CodeContextRange", "Token", "TokenKind"]
