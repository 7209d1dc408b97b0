"""
Capability interfaces used by the scraper core

The collector never talks to a browser or the disk directly. It is handed a
page capability and a filesystem capability, which keeps geometry selection,
tooltip parsing and series reconciliation testable without a live browser.

Author: feature-developer
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Union

from ..models.chart import BoundingBox, VisualElement


PathLike = Union[str, Path]


class PageCapability(ABC):
    """Operations the collector needs from a loaded page"""

    @abstractmethod
    def navigate(self, url: str, timeout_ms: int) -> None:
        """Load ``url``, giving up after ``timeout_ms``"""

    @abstractmethod
    def evaluate(self, script: str, *args: Any) -> Any:
        """Run a script against the current page state and return its value"""

    @abstractmethod
    def enumerate(self, selector: str) -> List[VisualElement]:
        """Elements matching a CSS selector, with bounding boxes"""

    @abstractmethod
    def scroll_into_view(self, element: VisualElement) -> Optional[BoundingBox]:
        """Scroll so the element is centred in the viewport and return its new box"""

    @abstractmethod
    def move_pointer(self, x: float, y: float) -> None:
        """Move the virtual pointer to a viewport coordinate"""

    @abstractmethod
    def wait(self, ms: int) -> None:
        """Block for a fixed delay"""


class FileSystemCapability(ABC):
    """Operations the output writer needs from a filesystem"""

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        pass

    @abstractmethod
    def write_text(self, path: PathLike, content: str) -> None:
        """Create or fully overwrite ``path``"""

    @abstractmethod
    def append_text(self, path: PathLike, content: str) -> None:
        """Append to the end of ``path``"""


class LocalFileSystem(FileSystemCapability):
    """FileSystemCapability backed by the local disk"""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def write_text(self, path: PathLike, content: str) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding=self.encoding, newline='') as f:
            f.write(content)

    def append_text(self, path: PathLike, content: str) -> None:
        with open(path, 'a', encoding=self.encoding, newline='') as f:
            f.write(content)
