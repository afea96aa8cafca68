import re
from functools import total_ordering
from typing import Annotated, Any, Literal, Optional, Union

import semantic_version
from pydantic import Field, model_serializer, model_validator

from . import MetaBase
from .enum import StrEnum
from .system import Architecture, Platform, ScopeKey
from ..common.errors import SchemaInconsistency, VersionFormatError
from ..common.java import CORRETTO_URL, TEMURIN_URL


class JdkDistribution(StrEnum):
    Corretto = "CORRETTO"
    Temurin = "TEMURIN"

    @property
    def homepage(self) -> str:
        return JDK_DISTRIBUTION_HOMEPAGES[self]


JDK_DISTRIBUTION_HOMEPAGES = {
    JdkDistribution.Corretto: CORRETTO_URL,
    JdkDistribution.Temurin: TEMURIN_URL,
}

# 1.{major}.{minor}_{patch}-b{build}, ex. 1.8.0_152-b16
LEGACY_VERSION_RE = re.compile(
    r"^1\.(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:_(?P<patch>\d+))?(?:-b(?P<build>\d+))?$"
)
# {major}.{minor}.{patch}+{build}, ex. 11.0.12+7
VERSION_RE = re.compile(
    r"^(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?(?:\+(?P<build>\d+))?$"
)


@total_ordering
class JavaVersion(MetaBase):
    """
    A Java runtime version in either notation:

        JDK 8 and prior: 1.{major}.{minor}_{patch}-b{build}   (1.8.0_152-b16)
        JDK 9+:          {major}.{minor}.{patch}+{build}      (11.0.12+7)

    Legacy versions translate to the JDK 9+ form (1.8.0_152-b16 -> 8.0.152+16),
    which is semver compliant. The notation a version was parsed from, and which
    parts it spelled out, are kept so it formats back to the same string.
    Omitted parts order as 0.
    """

    major: int
    minor: Optional[int] = None
    patch: Optional[int] = None
    build: Optional[int] = None
    legacy: bool = False

    @classmethod
    def parse(cls, value: str) -> "JavaVersion":
        if not isinstance(value, str):
            raise VersionFormatError(repr(value), "expected a string")
        value = value.strip()
        legacy = True
        m = LEGACY_VERSION_RE.match(value)
        if m is None:
            legacy = False
            m = VERSION_RE.match(value)
        if m is None:
            raise VersionFormatError(value)

        parts = {k: int(v) if v is not None else None for k, v in m.groupdict().items()}
        return cls(legacy=legacy, **parts)

    @model_validator(mode="before")
    @classmethod
    def from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return cls.parse(data).__dict__
        return data

    @model_serializer
    def serialize(self) -> str:
        return str(self)

    def to_semver_string(self) -> str:
        ver = f"{self.major}.{self.minor or 0}.{self.patch or 0}"
        if self.build is not None:
            ver = f"{ver}+{self.build}"
        return ver

    def to_version_string(self) -> str:
        ver = str(self.major)
        if self.minor is not None or self.patch is not None:
            ver = f"{ver}.{self.minor or 0}"
        if self.patch is not None:
            ver = f"{ver}.{self.patch}"
        if self.build is not None:
            ver = f"{ver}+{self.build}"
        return ver

    def to_legacy_string(self) -> str:
        ver = f"1.{self.major}"
        if self.minor is not None or self.patch is not None:
            ver = f"{ver}.{self.minor or 0}"
        if self.patch is not None:
            ver = f"{ver}_{self.patch}"
        if self.build is not None:
            ver = f"{ver}-b{self.build}"
        return ver

    def to_semver(self) -> semantic_version.Version:
        # build metadata never takes part in range matching
        return semantic_version.Version(
            major=self.major, minor=self.minor or 0, patch=self.patch or 0
        )

    def __str__(self):
        if self.legacy:
            return self.to_legacy_string()
        return self.to_version_string()

    def covers(self, other: "JavaVersion"):
        """Whether other matches every part spelled out in this version, ex. 17.0.5 covers 17.0.5+8."""
        return all(
            ours is None or ours == theirs
            for ours, theirs in (
                (self.minor, other.minor or 0),
                (self.patch, other.patch or 0),
                (self.build, other.build or 0),
            )
        ) and self.major == other.major

    def to_tuple(self):
        return (self.major, self.minor or 0, self.patch or 0, self.build or 0)

    def __eq__(self, other: Any):
        if not isinstance(other, JavaVersion):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __lt__(self, other: "JavaVersion"):
        return self.to_tuple() < other.to_tuple()

    def __hash__(self):
        return hash(self.to_tuple())


class RamSpec(MetaBase):
    """RAM settings in megabytes."""

    recommended: int
    minimum: int

    def check_integrity(self, interval: Optional[int] = None):
        if self.minimum > self.recommended:
            raise SchemaInconsistency(
                f"RAM minimum {self.minimum}MB is above the recommended {self.recommended}MB"
            )
        if interval is not None:
            for name, value in (
                ("recommended", self.recommended),
                ("minimum", self.minimum),
            ):
                if value % interval != 0:
                    raise SchemaInconsistency(
                        f"RAM {name} {value}MB is not a multiple of {interval}MB"
                    )


class MajorVersionRule(MetaBase):
    """
    Bounds for one major. A maximum or blacklist entry that leaves out parts
    covers every version sharing the parts it gives: a maximum of 17.0.5
    accepts 17.0.5+8, a blacklisted 17.0.5 rejects every 17.0.5 build.
    """

    minimum: Optional[JavaVersion] = None
    maximum: Optional[JavaVersion] = None
    blacklist: list[JavaVersion] = []

    def accepts(self, version: JavaVersion):
        if self.minimum is not None and version < self.minimum:
            return False
        if (
            self.maximum is not None
            and version > self.maximum
            and not self.maximum.covers(version)
        ):
            return False
        return not any(banned.covers(version) for banned in self.blacklist)


class MajorVersionConstraint(MetaBase):
    """Explicit list of accepted majors, each optionally narrowed by a rule."""

    kind: Literal["majors"] = "majors"
    majors: list[int]
    rules: dict[int, MajorVersionRule] = {}

    @property
    def suggested_major(self) -> Optional[int]:
        if not self.majors:
            return None
        return self.majors[0]

    def check_integrity(self):
        for major in self.rules:
            if major not in self.majors:
                raise SchemaInconsistency(
                    f"Version rules given for Java {major}, which is not a supported major {self.majors}"
                )

    def accepts(self, version: JavaVersion):
        if version.major not in self.majors:
            return False
        rule = self.rules.get(version.major)
        return rule is None or rule.accepts(version)


# matches partial versions inside a range string, ex. ">=16 <20" or "^17.0.5"
RANGE_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_range(supported: str) -> semantic_version.NpmSpec:
    try:
        return semantic_version.NpmSpec(supported)
    except ValueError as e:
        raise VersionFormatError(supported, str(e)) from e


def range_allows_major(supported: str, major: int):
    """
    Whether any version of the given major satisfies the range.
    Every bound of the range is probed together with the start of the major.
    """
    spec = parse_range(supported)
    probes = [(major, 0, 0)]
    for m in RANGE_VERSION_RE.finditer(supported):
        if int(m.group(1)) != major:
            continue
        minor = int(m.group(2) or 0)
        patch = int(m.group(3) or 0)
        probes += [(major, minor, patch), (major, minor, patch + 1), (major, minor + 1, 0)]
    return any(
        spec.match(semantic_version.Version(major=ma, minor=mi, patch=pa))
        for ma, mi, pa in probes
    )


class SemverRangeConstraint(MetaBase):
    """
    A semver range of supported JDK versions (npm range syntax) and the
    suggested major, which must lie within the range.
    """

    kind: Literal["range"] = "range"
    supported: Optional[str] = None
    suggested_major: Optional[int] = Field(None, alias="suggestedMajor")

    def check_integrity(self):
        if self.supported is None:
            return
        if self.suggested_major is None:
            raise SchemaInconsistency(
                f"Supported range {self.supported!r} is set without a suggested major"
            )
        if not range_allows_major(self.supported, self.suggested_major):
            raise SchemaInconsistency(
                f"Suggested major {self.suggested_major} is outside the supported range {self.supported!r}"
            )

    def accepts(self, version: JavaVersion):
        if self.supported is not None:
            return parse_range(self.supported).match(version.to_semver())
        if self.suggested_major is not None:
            return version.major == self.suggested_major
        return True


VersionConstraint = Annotated[
    Union[MajorVersionConstraint, SemverRangeConstraint], Field(discriminator="kind")
]


class RuleEntry(MetaBase):
    scope: ScopeKey
    distribution: Optional[JdkDistribution] = None
    version: Optional[VersionConstraint] = None
    ram: Optional[RamSpec] = None

    def check_integrity(self, ram_interval: Optional[int] = None):
        if self.version is not None:
            self.version.check_integrity()
        if self.ram is not None:
            self.ram.check_integrity(ram_interval)

    def to_policy(self, platform: Platform, architecture: Architecture):
        return ResolvedPolicy(
            platform=platform,
            architecture=architecture,
            distribution=self.distribution,
            version=self.version,
            ram=self.ram,
        )


class ResolvedPolicy(MetaBase):
    """
    Effective Java rules for one platform and architecture.
    A field left as None is undefined: the client applies its own default.
    """

    platform: Platform
    architecture: Architecture
    distribution: Optional[JdkDistribution] = None
    version: Optional[VersionConstraint] = None
    ram: Optional[RamSpec] = None

    def undefined_fields(self) -> list[str]:
        return [
            key
            for key in ("distribution", "version", "ram")
            if getattr(self, key) is None
        ]

    def accepts(self, version: JavaVersion) -> Optional[bool]:
        if self.version is None:
            return None
        return self.version.accepts(version)
