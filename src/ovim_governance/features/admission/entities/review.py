"""admission.k8s.io/v1 AdmissionReview envelope.

Only the fields the validating webhook reads or writes are modeled; unknown
fields are ignored on input.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ADMISSION_API_VERSION = "admission.k8s.io/v1"
ADMISSION_REVIEW_KIND = "AdmissionReview"


class ObjectMeta(BaseModel):
    """Metadata of the object under review."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    namespace: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)

    @field_validator("name", "namespace", mode="before")
    @classmethod
    def null_string_is_empty(cls, value):
        return "" if value is None else value

    @field_validator("labels", mode="before")
    @classmethod
    def null_labels_are_empty(cls, value):
        return {} if value is None else value


class KubeObject(BaseModel):
    """Any Kubernetes object, reduced to what the policy inspects."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    api_version: str = Field(default="", alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @field_validator("metadata", mode="before")
    @classmethod
    def null_metadata_is_empty(cls, value):
        return {} if value is None else value


class GroupVersionKind(BaseModel):
    group: str = ""
    version: str = ""
    kind: str = ""


class AdmissionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    uid: str
    kind: GroupVersionKind
    namespace: str = ""
    name: str = ""
    operation: str = ""
    object_: Optional[Any] = Field(default=None, alias="object")


class AdmissionStatus(BaseModel):
    code: int
    message: str = ""


class AdmissionResponse(BaseModel):
    uid: str
    allowed: bool
    status: Optional[AdmissionStatus] = None


class AdmissionReview(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    api_version: str = Field(default=ADMISSION_API_VERSION, alias="apiVersion")
    kind: str = ADMISSION_REVIEW_KIND
    request: Optional[AdmissionRequest] = None
    response: Optional[AdmissionResponse] = None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
