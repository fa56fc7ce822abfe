"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: tokenizer.py
Summary: Splits chat messages into command tokens.
"""

import re

# A quoted phrase, or a run of non-whitespace. An unmatched quote falls
# through to the second branch and stays part of a raw token.
TOKEN_RE = re.compile(r'"([^"]*)"|(\S+)')


def tokenize(text):
    """Split text into tokens, keeping "quoted phrases" together."""
    tokens = []
    for match in TOKEN_RE.finditer(text or ""):
        quoted, raw = match.groups()
        tokens.append(quoted if quoted is not None else raw)
    return tokens


def is_addressed(tokens, prefix):
    """True when the message starts with the bot's invocation prefix."""
    return bool(tokens) and tokens[0] == prefix
