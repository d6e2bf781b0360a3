#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/utils/images.py
"""Image destination attribute parsing.

Figure attributes travel inside the image destination as a pseudo query
string::

    ![alt](plot.png?width=0.5&caption=A%20nice%20plot&label=fig:plot)

Only ``width``, ``label`` and ``caption`` are understood. Values are taken
literally except that ``%20`` in a caption becomes a space; no other
percent-decoding is done.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

KNOWN_ATTRIBUTES = frozenset({b"width", b"label", b"caption"})


@dataclass(frozen=True)
class ImageAttributeProblem:
    """An attribute that could not be used.

    Parameters
    ----------
    token : bytes
        Offending ``key=value`` token, or the key when it was unsupported
    reason : str
        Either ``"invalid"`` (no ``=``) or ``"unsupported"`` (unknown key)

    """

    token: bytes
    reason: str


@dataclass(frozen=True)
class ImageSpec:
    """Parsed image destination.

    Missing attributes are empty, never absent, so they can be templated
    directly.
    """

    path: bytes
    width: bytes = b""
    label: bytes = b""
    caption: bytes = b""
    problems: tuple[ImageAttributeProblem, ...] = field(default_factory=tuple)


def parse_image_destination(destination: bytes) -> ImageSpec:
    """Split an image destination into its path and figure attributes.

    Parameters
    ----------
    destination : bytes
        Raw image destination

    Returns
    -------
    ImageSpec
        Path, recognized attributes and any problems, in source order

    Examples
    --------
    >>> spec = parse_image_destination(b"pic.png?width=0.5&caption=A%20B&bogus=1")
    >>> spec.path, spec.width, spec.caption
    (b'pic.png', b'0.5', b'A B')
    >>> spec.problems
    (ImageAttributeProblem(token=b'bogus', reason='unsupported'),)

    """
    path, has_query, query = destination.partition(b"?")
    attributes: dict[bytes, bytes] = {}
    problems: list[ImageAttributeProblem] = []

    if has_query:
        for token in query.split(b"&"):
            key, has_value, value = token.partition(b"=")
            if not has_value:
                logger.debug("Image %r has invalid attribute %r", path, token)
                problems.append(ImageAttributeProblem(token=token, reason="invalid"))
                continue
            if key not in KNOWN_ATTRIBUTES:
                logger.debug("Image %r has unsupported attribute %r", path, key)
                problems.append(ImageAttributeProblem(token=key, reason="unsupported"))
                continue
            if key == b"caption":
                value = value.replace(b"%20", b" ")
            attributes[key] = value

    return ImageSpec(
        path=path,
        width=attributes.get(b"width", b""),
        label=attributes.get(b"label", b""),
        caption=attributes.get(b"caption", b""),
        problems=tuple(problems),
    )
