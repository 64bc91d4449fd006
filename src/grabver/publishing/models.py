"""Package descriptor handed to the uploader."""

from datetime import datetime

from pydantic import BaseModel, Field


class PackageDescriptor(BaseModel):
    """Everything the uploader needs to publish one package version.

    Credentials and signing keys are not part of it: the uploader
    resolves those on its own.
    """

    repo: str = Field(description="Target repository")
    name: str = Field(description="Package name")
    description: str = ""
    website_url: str = ""
    vcs_url: str = ""
    licenses: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    version: str = Field(description="Display version, e.g. 1.2.5-beta")
    version_code: int = Field(ge=0, description="Monotonic release code")
    vcs_tag: str = Field(description="VCS tag of the release")
    released: datetime
    publish: bool = Field(default=True, description="Publish right after upload")
    public_download_numbers: bool = True
    sign: bool = Field(default=True, description="Ask the uploader to sign")
