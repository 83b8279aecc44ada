import importlib
import threading
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path
from typing import ClassVar

from PIL import Image

from planvision.pdf.base import NATIVE_BACKEND_LOCK


class PageSource(ABC):
    """An open PDF whose pages can be rendered one at a time, in order."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def render(self, page_index: int) -> Image.Image:
        """Render the zero-based page *page_index* to an RGB image."""
        raise NotImplementedError


class BasePageRenderer(ABC):
    """Contract for native PDF rasterization backends.

    Implementations hold ``backend_lock`` around each individual call into
    the native library (open, page count, render, close) and never across a
    yield, so concurrent files interleave page by page.
    """

    backend_modules: ClassVar[tuple[str, ...]]
    package_name: ClassVar[str]
    backend_lock: ClassVar[threading.Lock] = NATIVE_BACKEND_LOCK

    def __init__(self, scale: float = 1.5) -> None:
        self._scale = scale

    @property
    def scale(self) -> float:
        return self._scale

    @abstractmethod
    def open(self, path: Path) -> AbstractContextManager[PageSource]:
        """Open the PDF at *path* for rendering.

        Raises:
            Exception: whatever the backend raises for unreadable documents.
        """

    def self_check(self) -> None:
        """Load the backend; raises if it is unusable in this process."""
        for module in self.backend_modules:
            importlib.import_module(module)
