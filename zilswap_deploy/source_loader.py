"""
Contract Source Loader
Reads Scilla source files and compresses them for submission
"""

import logging
import os
import re

logger = logging.getLogger(__name__)

MATCH_COMMENTS = re.compile(r"[(][*].*?[*][)]", re.DOTALL)
MATCH_WHITESPACE = re.compile(r"\s+")


def read_contract_source(path: str) -> str:
    """Read the raw contract source"""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def load_contract(name: str, contracts_dir: str) -> str:
    """Read <contracts_dir>/<name>.scilla"""
    path = os.path.join(contracts_dir, f"{name}.scilla")
    logger.debug(f"Loading contract source from {path}")
    return read_contract_source(path)


def compress_code(code: str) -> str:
    """Strip block comments and collapse whitespace runs to a single space"""
    # removing an inner comment can close up an outer one
    stripped = MATCH_COMMENTS.sub("", code)
    while stripped != code:
        code = stripped
        stripped = MATCH_COMMENTS.sub("", code)
    return MATCH_WHITESPACE.sub(" ", stripped)
