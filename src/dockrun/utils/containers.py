"""Helpers for image references and command strings."""

from typing import List


def image_short_name(image: str) -> str:
    """Return the last path segment of an image reference.

    ``registry.example.com/library/alpine`` becomes ``alpine``. A reference
    without a separator is returned unchanged and an empty one stays empty.
    """
    return image.split("/")[-1]


def split_command(cmd: str) -> List[str]:
    """Split a command string on single spaces.

    No quoting or escaping is understood: ``"a  b"`` yields ``["a", "", "b"]``.
    Callers that need arguments containing spaces should pass tokens instead.
    """
    return cmd.split(" ")
