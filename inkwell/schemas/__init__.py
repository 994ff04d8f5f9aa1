from inkwell.schemas.blog import (
    Blog,
    BlogDocument,
    BlogFields,
    BlogPayload,
    BlogPublishPayload,
    BlogStatus,
    BlogUpdate,
    MessageResponse,
    normalize_tags,
)
from inkwell.schemas.health import HealthCheckResponse

__all__ = [
    "Blog",
    "BlogDocument",
    "BlogFields",
    "BlogPayload",
    "BlogPublishPayload",
    "BlogStatus",
    "BlogUpdate",
    "HealthCheckResponse",
    "MessageResponse",
    "normalize_tags",
]
