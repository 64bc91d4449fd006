"""Publishing hand-off: describe a computed version and run the uploader."""

from grabver.publishing.models import PackageDescriptor
from grabver.publishing.publisher import (
    CommandPublisher,
    Publisher,
    build_descriptor,
    publish_version,
    should_publish,
)

__all__ = [
    "CommandPublisher",
    "PackageDescriptor",
    "Publisher",
    "build_descriptor",
    "publish_version",
    "should_publish",
]
