import platform as host
import sys
from enum import IntEnum
from typing import Optional

from pydantic import Field

from . import MetaBase
from .enum import StrEnum
from ..common.java import WILDCARD


class Platform(StrEnum):
    Darwin = "darwin"
    Linux = "linux"
    Win32 = "win32"
    All = WILDCARD

    @classmethod
    def current(cls) -> Optional["Platform"]:
        return translate_platform(sys.platform)


class Architecture(StrEnum):
    Arm64 = "arm64"
    X64 = "x64"
    All = WILDCARD

    @classmethod
    def current(cls) -> Optional["Architecture"]:
        return translate_arch(host.machine())


PLATFORM_TRANSLATIONS = {
    "osx": Platform.Darwin,
    "mac": Platform.Darwin,
    "macos": Platform.Darwin,
    "mac-os": Platform.Darwin,
    "linux2": Platform.Linux,
    "windows": Platform.Win32,
    "win64": Platform.Win32,
    "cygwin": Platform.Win32,
    "msys": Platform.Win32,
}

ARCHITECTURE_TRANSLATIONS = {
    "x86_64": Architecture.X64,
    "amd64": Architecture.X64,
    "aarch64": Architecture.Arm64,
    "armv8": Architecture.Arm64,
}


def translate_platform(name: str) -> Optional[Platform]:
    name = name.lower()
    if name in PLATFORM_TRANSLATIONS:
        return PLATFORM_TRANSLATIONS[name]
    try:
        found = Platform(name)
    except ValueError:
        return None
    if found is Platform.All:
        return None
    return found


def translate_arch(arch: str) -> Optional[Architecture]:
    arch = arch.lower()
    if arch in ARCHITECTURE_TRANSLATIONS:
        return ARCHITECTURE_TRANSLATIONS[arch]
    try:
        found = Architecture(arch)
    except ValueError:
        return None
    if found is Architecture.All:
        return None
    return found


class Precedence(IntEnum):
    """Highest precedence first."""

    Exact = 0
    Platform = 1
    Wildcard = 2


class ScopeKey(MetaBase):
    platform: Platform
    architecture: Architecture = Field(Architecture.All)

    def __str__(self):
        return f"{self.platform}/{self.architecture}"

    def is_valid(self):
        # a concrete architecture cannot be scoped to every platform
        return not (
            self.platform is Platform.All and self.architecture is not Architecture.All
        )

    def precedence_for(
        self, platform: Platform, architecture: Architecture
    ) -> Optional[Precedence]:
        if not self.is_valid():
            return None
        if self.platform is Platform.All:
            return Precedence.Wildcard
        if self.platform is not platform:
            return None
        if self.architecture is Architecture.All:
            return Precedence.Platform
        if self.architecture is architecture:
            return Precedence.Exact
        return None
