"""Message instance registry, reference tokens and the document walker.

Python 3.13+.
"""

from .codec import InstanceId, decode, encode, is_token
from .instances import MessageInstance, ResolvedInstance, deep_equal
from .registry import InstanceRegistry, MessageIdFactory
from .walker import (
    DocumentWalker,
    MessagePathReport,
    TokenResolver,
    ValuesPath,
    classify,
    format_path,
    replace_tokens,
)

__all__ = [
    "DocumentWalker",
    "InstanceId",
    "InstanceRegistry",
    "MessageIdFactory",
    "MessageInstance",
    "MessagePathReport",
    "ResolvedInstance",
    "TokenResolver",
    "ValuesPath",
    "classify",
    "decode",
    "deep_equal",
    "encode",
    "format_path",
    "is_token",
    "replace_tokens",
]
