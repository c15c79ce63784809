"""Built-in extensions, registered ahead of entry-point discovery."""

from __future__ import annotations

from collections.abc import Callable

from planext.plugins.builtins.layer_filter import LayerFilterExtension
from planext.plugins.builtins.native_image import NativeImageExtension

BUILTIN_EXTENSIONS: dict[str, Callable[[], object]] = {
    "native-image": NativeImageExtension,
    "layer-filter": LayerFilterExtension,
}
