"""
Platform detection: OS classification and Linux distribution probing.
"""

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Mapping


class OSKind(str, Enum):
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


class LinuxDistro(str, Enum):
    DEBIAN = "debian"
    FEDORA = "fedora"
    REDHAT = "redhat"
    UNSUPPORTED = "unsupported"


# Checked in order; the first match wins.
_OS_PREFIXES: list[tuple[str, OSKind]] = [
    ("linux-gnu", OSKind.LINUX),
    ("darwin", OSKind.MACOS),
    ("cygwin", OSKind.WINDOWS),
    ("msys", OSKind.WINDOWS),
    ("win32", OSKind.WINDOWS),
]

# Marker files relative to the filesystem root, in priority order.
_DISTRO_MARKERS: list[tuple[str, LinuxDistro]] = [
    ("etc/debian_version", LinuxDistro.DEBIAN),
    ("etc/fedora-release", LinuxDistro.FEDORA),
    ("etc/redhat-release", LinuxDistro.REDHAT),
]

_POSIX_LAYER_PREFIXES = ("msys", "cygwin")


def os_indicator(environ: Mapping[str, str] | None = None) -> str:
    """Return an OSTYPE-style string describing the host.

    Shells export OSTYPE only occasionally, so fall back to sys.platform
    mapped onto the same vocabulary.
    """
    env = os.environ if environ is None else environ
    ostype = env.get("OSTYPE", "")
    if ostype:
        return ostype
    if sys.platform.startswith("linux"):
        return "linux-gnu"
    return sys.platform


def detect_os(indicator: str) -> OSKind:
    """Classify an OSTYPE-style indicator. Unmatched input is UNKNOWN."""
    value = (indicator or "").lower()
    for prefix, kind in _OS_PREFIXES:
        if value.startswith(prefix):
            return kind
    return OSKind.UNKNOWN


def detect_linux_distro(root: Path = Path("/")) -> LinuxDistro:
    """Identify the distribution family from its release marker file."""
    for marker, distro in _DISTRO_MARKERS:
        if (Path(root) / marker).exists():
            return distro
    return LinuxDistro.UNSUPPORTED


def in_posix_layer(indicator: str, environ: Mapping[str, str] | None = None) -> bool:
    """Check if running inside Git Bash, MSYS2 or Cygwin on Windows."""
    env = os.environ if environ is None else environ
    if (indicator or "").lower().startswith(_POSIX_LAYER_PREFIXES):
        return True
    return bool(env.get("MSYSTEM"))


def is_root() -> bool:
    """Check if the current process runs with root privileges."""
    return hasattr(os, "geteuid") and os.geteuid() == 0
