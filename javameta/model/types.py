from typing import NamedTuple, Optional

from .enum import StrEnum


class Type(StrEnum):
    """
    Kinds of artifact a distribution can declare.

    ForgeHosted is deprecated and will be replaced by Forge.
    """

    Library = "Library"
    ForgeHosted = "ForgeHosted"
    """Deprecated, will be replaced by Forge."""
    Forge = "Forge"
    Fabric = "Fabric"
    LiteLoader = "LiteLoader"
    ForgeMod = "ForgeMod"
    FabricMod = "FabricMod"
    LiteMod = "LiteMod"
    File = "File"
    VersionManifest = "VersionManifest"

    @property
    def metadata(self) -> "TypeMetadata":
        return TYPE_METADATA[self]

    @property
    def default_extension(self) -> Optional[str]:
        return TYPE_METADATA[self].default_extension

    @property
    def deprecated(self) -> bool:
        return self in DEPRECATED_TYPES


class TypeMetadata(NamedTuple):
    id: str
    default_extension: Optional[str] = None


TYPE_METADATA = {
    Type.Library: TypeMetadata(Type.Library.value, "jar"),
    Type.ForgeHosted: TypeMetadata(Type.ForgeHosted.value, "jar"),
    Type.Forge: TypeMetadata(Type.Forge.value, "jar"),
    Type.Fabric: TypeMetadata(Type.Fabric.value, "jar"),
    Type.LiteLoader: TypeMetadata(Type.LiteLoader.value, "jar"),
    Type.ForgeMod: TypeMetadata(Type.ForgeMod.value, "jar"),
    Type.FabricMod: TypeMetadata(Type.FabricMod.value, "jar"),
    Type.LiteMod: TypeMetadata(Type.LiteMod.value, "litemod"),
    Type.File: TypeMetadata(Type.File.value),
    Type.VersionManifest: TypeMetadata(Type.VersionManifest.value, "json"),
}

DEPRECATED_TYPES = frozenset({Type.ForgeHosted})


def artifact_filename(name: str, type_: Type) -> str:
    """Append the default extension of the type, if it has one and name lacks it."""
    ext = type_.default_extension
    if ext is None or name.endswith(f".{ext}"):
        return name
    return f"{name}.{ext}"
