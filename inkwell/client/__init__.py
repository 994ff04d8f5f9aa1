"""
Editor client package.

This package talks to the blog API and keeps the state an editor needs:
cached blogs in device storage, the list of blogs, auto-saving and the
editor page flow.
"""

from inkwell.client.api import BlogApiClient
from inkwell.client.autosave import AutoSaveCoordinator
from inkwell.client.context import BlogContext
from inkwell.client.editor import EditorSession
from inkwell.client.storage import (
    DeviceStorage,
    FileDeviceStorage,
    MemoryDeviceStorage,
    backup_key,
    cache_key,
    get_device_storage,
)
from inkwell.client.views import Toast, render_home, save_status_text

__all__ = [
    "AutoSaveCoordinator",
    "BlogApiClient",
    "BlogContext",
    "DeviceStorage",
    "EditorSession",
    "FileDeviceStorage",
    "MemoryDeviceStorage",
    "Toast",
    "backup_key",
    "cache_key",
    "get_device_storage",
    "render_home",
    "save_status_text",
]
