"""
Pydantic models for driver requests and responses.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from nfs_flexvolume.cli.lib.paths import sort_mount_options
from nfs_flexvolume.cli.lib.validators import parse_mode, validate_sub_path


class DriverStatus(str, Enum):
    """Status values understood by the kubelet."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    NOT_SUPPORTED = "Not supported"


class VolumeSource(BaseModel):
    """Options object passed as the last argument of `mount`."""

    # The kubelet adds its own keys (kubernetes.io/pod.name, ...) to the options.
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    share: str = Field(..., description="Remote export (e.g., nfs.example.com:/export)", min_length=1)
    mount_options: str = Field("", alias="mountOptions", description="Comma separated mount options")
    sub_path: str = Field("", alias="subPath", description="Relative directory inside the share")
    create_if_necessary: bool = Field(False, alias="createIfNecessary", description="Create subPath if absent")
    create_mode: Optional[int] = Field(None, alias="createMode", description="Mode used when creating subPath")

    @field_validator("create_if_necessary", mode="before")
    def parse_create_if_necessary(cls, v: object) -> bool:
        if isinstance(v, bool):
            return v
        raw = str(v).strip().lower()
        if raw == "true":
            return True
        if raw in ("false", ""):
            return False
        raise ValueError(f"createIfNecessary must be 'true' or 'false', got {v!r}")

    @field_validator("create_mode", mode="before")
    def parse_create_mode(cls, v: object) -> Optional[int]:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return parse_mode(v)

    @field_validator("sub_path")
    def check_sub_path(cls, v: str) -> str:
        validate_sub_path(v)
        return v

    @model_validator(mode="after")
    def require_mode_for_create(self) -> "VolumeSource":
        if self.create_if_necessary and self.create_mode is None:
            raise ValueError("createMode is required when createIfNecessary is true")
        return self

    @property
    def sorted_mount_options(self) -> str:
        return sort_mount_options(self.mount_options)


class DriverResult(BaseModel):
    """Response object written to stdout for every driver call."""

    model_config = ConfigDict(frozen=True)

    status: DriverStatus
    message: str
    capabilities: Optional[Dict[str, bool]] = None

    @classmethod
    def success(cls, message: str) -> "DriverResult":
        return cls(status=DriverStatus.SUCCESS, message=message)

    @classmethod
    def failure(cls, message: str) -> "DriverResult":
        return cls(status=DriverStatus.FAILURE, message=message)

    @classmethod
    def not_supported(cls, operation: str) -> "DriverResult":
        return cls(status=DriverStatus.NOT_SUPPORTED, message=f"Operation {operation} is not supported")

    @classmethod
    def initialized(cls) -> "DriverResult":
        # attach=false: the kubelet calls mount/unmount directly, no attach/detach phase.
        return cls(status=DriverStatus.SUCCESS, message="No Initialization required", capabilities={"attach": False})

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)
