"""Exceptions raised while resolving and registering assets."""

from pathlib import Path


class EnqueuesError(Exception):
    """Base class for all asset resolution errors."""


class DuplicateEntryKeyError(EnqueuesError):
    """Two source files resolved to the same entry key."""

    def __init__(self, key: str, first: Path, second: Path) -> None:
        self.key = key
        self.first = first
        self.second = second
        super().__init__(f"Duplicate entry key {key!r}: {first} and {second}")


class MissingDistDirectoryError(EnqueuesError):
    """Compiled output directory is missing."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Block Editor dist dir {path} missing.")


class MissingMetadataFileError(EnqueuesError):
    """Metadata sidecar for a compiled script is missing."""

    def __init__(self, artifact: Path) -> None:
        self.artifact = artifact
        super().__init__(f"No metadata sidecar found for {artifact}")


class InvalidMetadataError(EnqueuesError):
    """Metadata sidecar exists but cannot be used."""


class ArtifactNotFoundError(EnqueuesError):
    """A required compiled artifact is missing."""

    def __init__(self, directory: Path, stem: str) -> None:
        self.directory = directory
        self.stem = stem
        super().__init__(
            f"Run the build for the Block Editor asset files, "
            f"the {stem} bundle is missing in {directory}."
        )


class MissingBlockMetadataError(EnqueuesError):
    """Block folder has no block.json."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Block Editor block metadata file {path} is missing.")


class BlockRegistrationError(EnqueuesError):
    """Host refused to register a block."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Block Editor block failed to register {name}.")
