"""
Scroll-driven animation controller.

The controller owns nothing but a loaded model and the current clip time.
Scroll offsets come from an injected ScrollPositionProvider so the mapping
can be driven deterministically (tests, server-side previews) instead of
reading a browser window.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

from app.modules.viewer.normalize import BoundingBox, ModelTransform, normalize_model
from app.modules.viewer.scrubber import DEFAULT_MAX_SCROLL, FRAME_TIME, scrub_time

logger = logging.getLogger(__name__)

ScrollListener = Callable[[float], None]
Unsubscribe = Callable[[], None]


class AnimationMixer(ABC):
    """Mixer contract: the controller only ever sets an absolute time."""

    @abstractmethod
    def set_time(self, time: float) -> None:
        ...


@dataclass
class LoadedModel:
    bounds: BoundingBox
    clip_duration: float
    mixer: AnimationMixer
    transform: Optional[ModelTransform] = None


ModelLoader = Callable[[str], LoadedModel]


class ScrollPositionProvider(ABC):
    """Scroll offset source with explicit subscription teardown."""

    @abstractmethod
    def current(self) -> float:
        ...

    @abstractmethod
    def subscribe(self, listener: ScrollListener) -> Unsubscribe:
        ...


class ScrollState(ScrollPositionProvider):
    """In-process provider: call `scroll_to` to publish a new offset."""

    def __init__(self, scroll_y: float = 0.0):
        self._scroll_y = max(0.0, scroll_y)
        self._listeners: List[ScrollListener] = []

    def current(self) -> float:
        return self._scroll_y

    def subscribe(self, listener: ScrollListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def scroll_to(self, scroll_y: float) -> None:
        self._scroll_y = max(0.0, scroll_y)
        for listener in list(self._listeners):
            listener(self._scroll_y)


class ScrollScrubController:
    def __init__(
        self,
        scroll: ScrollPositionProvider,
        loader: ModelLoader,
        model_url: str,
        max_scroll: float = DEFAULT_MAX_SCROLL,
        target_size: float = 3.0,
        frame_time: float = FRAME_TIME,
    ):
        self.scroll = scroll
        self.loader = loader
        self.model_url = model_url
        self.max_scroll = max_scroll
        self.target_size = target_size
        self.frame_time = frame_time
        self.model: Optional[LoadedModel] = None
        self.current_time: Optional[float] = None
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def visible(self) -> bool:
        return self.model is not None

    def load(self) -> bool:
        """Load and normalize the model, then subscribe to scroll. False if loading failed."""
        try:
            model = self.loader(self.model_url)
        except Exception:
            logger.exception("Failed to load model %s", self.model_url)
            return False

        model.transform = normalize_model(model.bounds, self.target_size)
        self.model = model
        self._unsubscribe = self.scroll.subscribe(self.on_scroll)
        self._apply(self.scroll.current())
        return True

    def time_for(self, scroll_y: float) -> float:
        if self.model is None:
            return 0.0
        return scrub_time(scroll_y, self.model.clip_duration, self.max_scroll, self.frame_time)

    def _apply(self, scroll_y: float) -> None:
        if self.model is None:
            return
        self.current_time = self.time_for(scroll_y)
        self.model.mixer.set_time(self.current_time)

    def on_scroll(self, scroll_y: float) -> None:
        self._apply(scroll_y)

    def on_frame(self, delta: float = 0.0) -> None:
        """Render tick; time comes from scroll, so delta is ignored."""
        self._apply(self.scroll.current())

    def dispose(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
