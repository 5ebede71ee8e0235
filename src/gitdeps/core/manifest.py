"""Requirements manifest parsing and classification.

Each non-comment, non-blank line of the manifest becomes a DependencyEntry
that is either git-sourced (force-reinstalled from its repository) or
registry-sourced (upgraded in place from the package index).

Classification rules:
- A line containing a git scheme (``git+ssh://``, ``git+https://``) is git-sourced.
  ``name @ url`` splits on the FIRST `` @ ``; otherwise the name is derived
  from the final path segment of the url with ``.git`` stripped.
- Anything else is registry-sourced and passed to pip verbatim.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from gitdeps.core.config import DEFAULT_GIT_SCHEMES

logger = logging.getLogger(__name__)

NAME_SEPARATOR = " @ "


class DependencyKind(Enum):
    GIT = "git"
    REGISTRY = "registry"


@dataclass(frozen=True)
class ManifestLine:
    """A raw manifest line with its 1-based position."""

    raw: str
    line_number: int

    @property
    def text(self) -> str:
        return self.raw.strip()

    @property
    def is_blank(self) -> bool:
        return self.text == ""

    @property
    def is_comment(self) -> bool:
        return self.text.startswith("#")


@dataclass(frozen=True)
class DependencyEntry:
    """A classified manifest entry.

    declared_name is always set for git-sourced entries and always None for
    registry-sourced ones, whose source_locator is itself the resolvable name.
    """

    kind: DependencyKind
    declared_name: str | None
    source_locator: str
    line_number: int = 0

    @property
    def is_git(self) -> bool:
        return self.kind == DependencyKind.GIT

    @property
    def display_name(self) -> str:
        if self.declared_name is not None:
            return self.declared_name
        return self.source_locator


def derive_package_name(source_locator: str) -> str:
    """Derive a package name from the final path segment of a git locator.

    >>> derive_package_name("git+ssh://host/group/pkgB.git")
    'pkgB'
    """
    segment = source_locator.rsplit("/", 1)[-1]
    if segment.endswith(".git"):
        segment = segment[: -len(".git")]
    return segment


def is_git_locator(text: str, schemes: Iterable[str] = DEFAULT_GIT_SCHEMES) -> bool:
    return any(scheme in text for scheme in schemes)


def classify_line(
    text: str,
    schemes: Iterable[str] = DEFAULT_GIT_SCHEMES,
    line_number: int = 0,
) -> DependencyEntry:
    """Classify one retained (non-comment, non-blank) manifest line.

    Git detection is checked before the name separator, so a registry line
    containing `` @ `` stays registry-sourced.
    """
    text = text.strip()

    if not is_git_locator(text, schemes):
        return DependencyEntry(
            kind=DependencyKind.REGISTRY,
            declared_name=None,
            source_locator=text,
            line_number=line_number,
        )

    if NAME_SEPARATOR in text:
        name, locator = text.split(NAME_SEPARATOR, 1)
        return DependencyEntry(
            kind=DependencyKind.GIT,
            declared_name=name.strip(),
            source_locator=locator.strip(),
            line_number=line_number,
        )

    return DependencyEntry(
        kind=DependencyKind.GIT,
        declared_name=derive_package_name(text),
        source_locator=text,
        line_number=line_number,
    )


def read_manifest_lines(handle: TextIO) -> Iterator[ManifestLine]:
    for index, raw in enumerate(handle, start=1):
        yield ManifestLine(raw=raw.rstrip("\r\n"), line_number=index)


def iter_dependencies(
    handle: TextIO,
    schemes: Iterable[str] = DEFAULT_GIT_SCHEMES,
) -> Iterator[DependencyEntry]:
    """Lazily classify every retained line of an open manifest.

    Single pass over the handle; the returned iterator cannot be restarted.
    """
    schemes = tuple(schemes)
    for line in read_manifest_lines(handle):
        if line.is_blank or line.is_comment:
            continue
        entry = classify_line(line.text, schemes, line.line_number)
        logger.debug(
            "Line %d classified: kind=%s, name=%s, locator=%s",
            line.line_number,
            entry.kind.value,
            entry.declared_name,
            entry.source_locator,
        )
        yield entry
