"""Deterministic identifiers for files, packages and declarations.

An id is the first 8 bytes of SHA-1 over the UTF-8 concatenation of its
parts, as 16 lowercase hex characters. Parts are concatenated without a
separator, so ``stable_id("a", "b") == stable_id("ab")``; callers that need
unambiguous ids put their own delimiter into the parts.
"""

import hashlib
import os
from pathlib import Path
from typing import Optional, Union

ID_LENGTH = 16

PathLike = Union[str, Path]


def stable_id(*parts: str) -> str:
    digest = hashlib.sha1()
    for part in parts:
        digest.update(part.encode("utf-8"))
    return digest.hexdigest()[:ID_LENGTH]


def normalize_path(path: PathLike, root: Optional[PathLike] = None) -> str:
    """Forward-slash path relative to ``root``, else absolute."""
    absolute = Path(os.path.abspath(path))
    if root is not None:
        try:
            return absolute.relative_to(os.path.abspath(root)).as_posix()
        except ValueError:
            pass
    return absolute.as_posix()


def file_id(path: PathLike, root: Optional[PathLike] = None, project_id: Optional[str] = None) -> str:
    prefix = f"{project_id}:" if project_id else ""
    return stable_id(prefix + normalize_path(path, root))


def package_id(package: str, project_id: Optional[str] = None) -> str:
    prefix = f"{project_id}:" if project_id else ""
    return stable_id(prefix + package)


def declaration_id(owning_file_id: str, signature: str, start_line: int) -> str:
    return stable_id(owning_file_id, ":", signature, ":", str(start_line))
