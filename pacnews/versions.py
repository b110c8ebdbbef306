"""
Package version ordering and outdated-package detection.

Versions follow pacman's ``[epoch:]version[-release]`` scheme and are compared
the way libalpm's ``alpm_pkg_vercmp`` does, never lexically.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

import functools
import string
from typing import Callable, Dict, Mapping, Optional, Tuple

from .utils.logger import get_logger

logger = get_logger(__name__)

_DIGITS = frozenset(string.digits)
_ALPHA = frozenset(string.ascii_letters)
_ALNUM = _DIGITS | _ALPHA

VersionCompare = Callable[[str, str], int]


def _parse_evr(evr: str) -> Tuple[str, str, Optional[str]]:
    """Split ``epoch:version-release`` into its parts; epoch defaults to "0"."""
    i = 0
    while i < len(evr) and evr[i] in _DIGITS:
        i += 1

    if i < len(evr) and evr[i] == ':':
        epoch = evr[:i] or "0"
        rest = evr[i + 1:]
    else:
        epoch = "0"
        rest = evr

    version, sep, release = rest.rpartition('-')
    if not sep:
        return epoch, rest, None
    return epoch, version, release


def _rpmvercmp(a: str, b: str) -> int:
    """Compare two version fragments segment by segment."""
    if a == b:
        return 0

    one = ptr1 = 0
    two = ptr2 = 0
    len_a, len_b = len(a), len(b)

    while one < len_a and two < len_b:
        while one < len_a and a[one] not in _ALNUM:
            one += 1
        while two < len_b and b[two] not in _ALNUM:
            two += 1

        if one >= len_a or two >= len_b:
            break

        # Different separator lengths decide on their own
        if one - ptr1 != two - ptr2:
            return -1 if one - ptr1 < two - ptr2 else 1

        ptr1, ptr2 = one, two

        if a[ptr1] in _DIGITS:
            while ptr1 < len_a and a[ptr1] in _DIGITS:
                ptr1 += 1
            while ptr2 < len_b and b[ptr2] in _DIGITS:
                ptr2 += 1
            isnum = True
        else:
            while ptr1 < len_a and a[ptr1] in _ALPHA:
                ptr1 += 1
            while ptr2 < len_b and b[ptr2] in _ALPHA:
                ptr2 += 1
            isnum = False

        seg_a = a[one:ptr1]
        seg_b = b[two:ptr2]

        if not seg_a:
            return -1

        # Segments of different types: numeric is newer
        if not seg_b:
            return 1 if isnum else -1

        if isnum:
            seg_a = seg_a.lstrip('0')
            seg_b = seg_b.lstrip('0')
            if len(seg_a) != len(seg_b):
                return 1 if len(seg_a) > len(seg_b) else -1

        if seg_a != seg_b:
            return -1 if seg_a < seg_b else 1

        one, two = ptr1, ptr2

    if one >= len_a and two >= len_b:
        return 0

    # A leftover alpha segment never beats an exhausted string: 1.0a < 1.0 < 1.0.1
    if (one >= len_a and b[two] not in _ALPHA) or (one < len_a and a[one] in _ALPHA):
        return -1
    return 1


def vercmp(a: str, b: str) -> int:
    """
    Compare two pacman version strings.

    Args:
        a: First version
        b: Second version

    Returns:
        -1 if a is older than b, 0 if they are equal, 1 if a is newer
    """
    if a == b:
        return 0

    epoch_a, version_a, release_a = _parse_evr(a)
    epoch_b, version_b, release_b = _parse_evr(b)

    ret = _rpmvercmp(epoch_a, epoch_b)
    if ret == 0:
        ret = _rpmvercmp(version_a, version_b)
        # The release only counts when both sides carry one
        if ret == 0 and release_a is not None and release_b is not None:
            ret = _rpmvercmp(release_a, release_b)
    return ret


@functools.total_ordering
class Version:
    """A version string ordered by :func:`vercmp`."""

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return vercmp(self.value, other.value) == 0

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return vercmp(self.value, other.value) < 0

    # Equal versions may be spelled differently ("1.01" == "1.1")
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Version({self.value!r})"

    def __str__(self) -> str:
        return self.value


def find_outdated(installed: Mapping[str, str],
                  remote: Mapping[str, str],
                  compare: VersionCompare = vercmp) -> Dict[str, str]:
    """
    Find installed packages that have a newer version in the repositories.

    Packages only present locally are skipped, as are packages whose
    repository version is equal or older.

    Args:
        installed: Installed package name -> version
        remote: Repository package name -> version
        compare: Version ordering, ``compare(a, b) > 0`` when a is newer

    Returns:
        Outdated package name -> repository version
    """
    outdated = {}
    for name, local_version in installed.items():
        remote_version = remote.get(name)
        if remote_version is None:
            continue
        if compare(remote_version, local_version) > 0:
            outdated[name] = remote_version

    logger.debug(f"{len(outdated)} of {len(installed)} installed packages are outdated")
    return outdated
