"""Shared Pydantic models for buildpack inputs and outputs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RuntimeDescriptor(BaseModel):
    """Function runtime declared in buildpack.toml under `metadata.runtime`."""

    model_config = ConfigDict(frozen=True)

    url: str
    sha256: str


class FunctionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_: str = Field(alias="class")
    payload_class: str
    payload_media_type: str
    return_class: str
    return_media_type: str


class FunctionBundleToml(BaseModel):
    """Contents of `function-bundle.toml` written by the detector."""

    function: FunctionModel


class ProcessModel(BaseModel):
    type: str
    command: str
    args: list[str] = Field(default_factory=list)
    direct: bool = False
    default: bool = False


class LaunchModel(BaseModel):
    processes: list[ProcessModel] = Field(default_factory=list)
