from inkwell.configs.settings import (
    BLOG_DELETED_MESSAGE,
    BLOG_NOT_FOUND_MESSAGE,
    SERVER_ERROR_MESSAGE,
    Settings,
    file_logger,
    settings,
)

__all__ = [
    "BLOG_DELETED_MESSAGE",
    "BLOG_NOT_FOUND_MESSAGE",
    "SERVER_ERROR_MESSAGE",
    "Settings",
    "file_logger",
    "settings",
]
