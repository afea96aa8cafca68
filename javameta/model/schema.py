import json
from typing import Any, ClassVar, Optional, Union

import requests
from pydantic import Field

from . import MetaBase
from .java import (
    JavaVersion,
    JdkDistribution,
    MajorVersionConstraint,
    MajorVersionRule,
    RamSpec,
    RuleEntry,
    SemverRangeConstraint,
)
from .system import Architecture, Platform, ScopeKey
from ..common import default_session, fetch_json
from ..common.errors import SchemaInconsistency
from ..common.java import (
    DISTRIBUTION_JAVA_KEY,
    MATRIX_GENERATION_KEY,
    OPTIONS_BASE_KEYS,
    OPTIONS_GENERATION_KEY,
    RAM_INTERVAL,
)


class MatrixMajorRules(MetaBase):
    minimum: Optional[str] = None
    maximum: Optional[str] = None
    blacklist: list[str] = []

    def to_rule(self) -> MajorVersionRule:
        return MajorVersionRule(
            minimum=JavaVersion.parse(self.minimum) if self.minimum else None,
            maximum=JavaVersion.parse(self.maximum) if self.maximum else None,
            blacklist=[JavaVersion.parse(v) for v in self.blacklist],
        )


class ValidationMatrix(MetaBase):
    """
    Java validation rules for a platform and architecture.
    Omitting the architecture applies the matrix to all architectures.
    """

    platform: Platform
    architecture: Architecture = Field(Architecture.All)
    distribution: Optional[JdkDistribution] = None
    supported_majors: Optional[list[int]] = Field(None, alias="supportedMajors")
    versions: Optional[dict[int, MatrixMajorRules]] = None
    ram: Optional[RamSpec] = None

    def to_rule_entry(self) -> RuleEntry:
        version = None
        if self.supported_majors is not None:
            version = MajorVersionConstraint(
                majors=self.supported_majors,
                rules={
                    major: rules.to_rule()
                    for major, rules in (self.versions or {}).items()
                },
            )
        elif self.versions:
            raise SchemaInconsistency(
                f"Validation matrix for {self.platform}/{self.architecture} has version rules but no supportedMajors"
            )
        return RuleEntry(
            scope=ScopeKey(platform=self.platform, architecture=self.architecture),
            distribution=self.distribution,
            version=version,
            ram=self.ram,
        )


class MatrixSchema(MetaBase):
    generation: ClassVar[str] = MATRIX_GENERATION_KEY
    ram_interval: ClassVar[Optional[int]] = None

    validation_matrices: list[ValidationMatrix] = Field(alias=MATRIX_GENERATION_KEY)

    def rule_entries(self) -> list[RuleEntry]:
        return [matrix.to_rule_entry() for matrix in self.validation_matrices]


class JavaVersionProps(MetaBase):
    distribution: Optional[JdkDistribution] = None
    # semver range of supported JDK versions, ex. ">=16 <20"
    supported: Optional[str] = None
    suggested_major: Optional[int] = Field(None, alias="suggestedMajor")

    def version_constraint(self) -> Optional[SemverRangeConstraint]:
        if self.supported is None and self.suggested_major is None:
            return None
        return SemverRangeConstraint(
            supported=self.supported, suggested_major=self.suggested_major
        )


class JavaPlatformOptions(JavaVersionProps):
    platform: Platform
    architecture: Optional[Architecture] = None

    def to_rule_entry(self) -> RuleEntry:
        return RuleEntry(
            scope=ScopeKey(
                platform=self.platform,
                architecture=self.architecture or Architecture.All,
            ),
            distribution=self.distribution,
            version=self.version_constraint(),
        )


class RangeSchema(JavaVersionProps):
    """
    Java options. The base properties apply to every platform; platformOptions
    override them per platform, or per platform and architecture.

    Precedence (highest - lowest)
    - Current platform, current architecture (ex. win32 x64)
    - Current platform, any architecture (ex. win32)
    - Base properties
    - Client logic
    """

    generation: ClassVar[str] = OPTIONS_GENERATION_KEY
    ram_interval: ClassVar[Optional[int]] = RAM_INTERVAL

    platform_options: Optional[list[JavaPlatformOptions]] = Field(
        None, alias=OPTIONS_GENERATION_KEY
    )
    ram: Optional[RamSpec] = None

    def rule_entries(self) -> list[RuleEntry]:
        entries = [
            RuleEntry(
                scope=ScopeKey(platform=Platform.All, architecture=Architecture.All),
                distribution=self.distribution,
                version=self.version_constraint(),
                ram=self.ram,
            )
        ]
        entries += [opts.to_rule_entry() for opts in self.platform_options or []]
        return entries


JavaSchema = Union[MatrixSchema, RangeSchema]


def detect_generation(data: dict[str, Any]) -> type[JavaSchema]:
    has_matrices = MATRIX_GENERATION_KEY in data
    has_options = OPTIONS_GENERATION_KEY in data or any(
        key in data for key in OPTIONS_BASE_KEYS
    )
    if has_matrices and has_options:
        raise SchemaInconsistency(
            f"Document mixes {MATRIX_GENERATION_KEY} and {OPTIONS_GENERATION_KEY} keys"
        )
    if has_matrices:
        return MatrixSchema
    if has_options or not data:
        return RangeSchema
    raise SchemaInconsistency(
        f"Unrecognised Java rules document with keys {sorted(data)}"
    )


class JavaRules(MetaBase):
    document: JavaSchema
    entries: list[RuleEntry]

    @property
    def generation(self) -> str:
        return self.document.generation

    @classmethod
    def from_document(cls, document: JavaSchema) -> "JavaRules":
        entries = document.rule_entries()
        for entry in entries:
            entry.check_integrity(document.ram_interval)
        return cls(document=document, entries=entries)

    @classmethod
    def from_file(cls, path: str) -> "JavaRules":
        with open(path, "r", encoding="utf-8") as f:
            return load_java_rules(json.load(f))

    @classmethod
    def from_url(
        cls, url: str, sess: Optional[requests.Session] = None
    ) -> "JavaRules":
        if sess is None:
            sess = default_session()
        return load_java_rules(fetch_json(sess, url))


def load_java_rules(data: Any) -> JavaRules:
    if not isinstance(data, dict):
        raise SchemaInconsistency(
            f"Java rules document must be an object, not {type(data).__name__}"
        )
    if DISTRIBUTION_JAVA_KEY in data:
        return load_java_rules(data[DISTRIBUTION_JAVA_KEY])

    schema = detect_generation(data)
    return JavaRules.from_document(schema.model_validate(data))
