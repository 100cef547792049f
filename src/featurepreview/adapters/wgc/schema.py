"""Pydantic models describing ``wgc --json`` output."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUCCESS_STATUS = "success"


class WgcBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GraphErrorPayload(WgcBaseModel):
    message: str = ""
    federated_graph_name: str | None = Field(default=None, alias="federatedGraphName")
    feature_flag: str | None = Field(default=None, alias="featureFlag")
    namespace: str | None = None


class CommandOutput(WgcBaseModel):
    """Structured result of a mutating command."""

    status: str
    message: str = ""
    composition_errors: list[GraphErrorPayload] = Field(
        default_factory=list, alias="compositionErrors"
    )
    deployment_errors: list[GraphErrorPayload] = Field(
        default_factory=list, alias="deploymentErrors"
    )

    @field_validator("composition_errors", "deployment_errors", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def succeeded(self) -> bool:
        return self.status.lower() == SUCCESS_STATUS


class FeatureFlagListing(WgcBaseModel):
    name: str
    namespace: str | None = None
    is_enabled: bool | None = Field(default=None, alias="isEnabled")


class FeatureFlagListOutput(WgcBaseModel):
    feature_flags: list[FeatureFlagListing] = Field(default_factory=list, alias="featureFlags")
