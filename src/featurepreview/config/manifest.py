"""Loading and validation of the preview manifest (``cosmo.yaml``)."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from featurepreview.domain.types import FeatureFlagConfig, SubgraphConfig

from .errors import ManifestError

log = getLogger(__name__)

DEFAULT_MANIFEST_PATH = ".github/cosmo.yaml"


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FeatureFlagEntry(ManifestBaseModel):
    name: str
    labels: list[str] = Field(default_factory=list)

    @field_validator("labels", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class SubgraphEntry(ManifestBaseModel):
    name: str
    schema_path: str
    routing_url: str


class ManifestDocument(ManifestBaseModel):
    namespace: str = "default"
    feature_flags: list[FeatureFlagEntry] | None = None
    subgraphs: list[SubgraphEntry] | None = None


@dataclass(frozen=True, slots=True)
class Manifest:
    """Validated manifest with schema paths resolved against its own directory."""

    path: Path
    namespace: str
    subgraphs: tuple[SubgraphConfig, ...]
    feature_flags: tuple[FeatureFlagConfig, ...]


def _read_document(path: Path) -> ManifestDocument:
    try:
        with path.open(encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ManifestError(f"The config file '{path}' is not valid YAML: {exc}") from exc
    try:
        return ManifestDocument.model_validate(raw or {})
    except ValidationError as exc:
        raise ManifestError(f"The config file '{path}' is invalid: {exc}") from exc


def load_manifest(path: Path | str) -> Manifest:
    """Parse ``path`` or raise ``ManifestError`` without producing partial state."""

    manifest_path = Path(path).expanduser().resolve()
    if not manifest_path.is_file():
        raise ManifestError(
            f"The input file '{manifest_path}' does not exist. Please check the path."
        )

    document = _read_document(manifest_path)
    if not document.feature_flags:
        raise ManifestError(
            f"Please provide at least one feature flag in the config file '{manifest_path}'."
        )
    if not document.subgraphs:
        raise ManifestError(
            f"Please provide at least one subgraph in the config file '{manifest_path}'."
        )

    location = manifest_path.parent
    subgraphs = tuple(
        SubgraphConfig(
            name=entry.name,
            schema_path=(location / entry.schema_path).resolve(),
            routing_url=entry.routing_url,
        )
        for entry in document.subgraphs
    )
    feature_flags = tuple(
        FeatureFlagConfig(name=entry.name, labels=tuple(entry.labels))
        for entry in document.feature_flags
    )
    log.info(
        "Loaded manifest %s: namespace=%s, subgraphs=%s, feature_flags=%s",
        manifest_path,
        document.namespace,
        [subgraph.name for subgraph in subgraphs],
        [flag.name for flag in feature_flags],
    )
    return Manifest(
        path=manifest_path,
        namespace=document.namespace,
        subgraphs=subgraphs,
        feature_flags=feature_flags,
    )
