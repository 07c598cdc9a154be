from .config import FormatterConfig, load_config
from .core import beautify, is_whole_code_block
from .errors import ConfigError, FormatFailedError, PhpBeautifyError
from .lexer import tokenize
from .markers import MarkerCodec
from .markup import format_html
from .models import CodeContextRange, Token, TokenKind
from .options import HtmlFormatOptions, to_html_options
from .ranges import find_code_context_ranges, in_code_context
from .service import format_document
from .transform import disguise
from .utils.exclude import is_excluded

__all__ = [
    "beautify",
    "is_whole_code_block",
    "format_document",
    "format_html",
    "tokenize",
    "find_code_context_ranges",
    "in_code_context",
    "disguise",
    "MarkerCodec",
    "HtmlFormatOptions",
    "to_html_options",
    "FormatterConfig",
    "load_config",
    "is_excluded",
    "Token",
    "TokenKind",
    "CodeContextRange",
    "PhpBeautifyError",
    "ConfigError",
    "FormatFailedError",
]
