"""
Scroll position to animation time mapping for the hero laptop model.

The clip is scrubbed, never played: its time is a pure function of the page
scroll offset. At the top of the page the clip sits one frame before its end
(laptop open); scrolling down to `max_scroll` rewinds it to time 0 (laptop
closed). The ease-out curve makes the lid move fastest at the start of the
scroll.
"""

FRAME_TIME = 1 / 24
DEFAULT_MAX_SCROLL = 600.0


def scroll_progress(scroll_y: float, max_scroll: float = DEFAULT_MAX_SCROLL) -> float:
    """Scroll offset as a fraction of max_scroll, clamped to [0, 1]."""
    if max_scroll <= 0:
        return 1.0
    return min(1.0, max(0.0, scroll_y / max_scroll))


def ease_out_quad(progress: float) -> float:
    return 1 - (1 - progress) ** 2


def scrub_time(
    scroll_y: float,
    clip_duration: float,
    max_scroll: float = DEFAULT_MAX_SCROLL,
    frame_time: float = FRAME_TIME,
) -> float:
    """Clip time for a scroll offset.

    scrub_time(0) == clip_duration - frame_time and
    scrub_time(y >= max_scroll) == 0; non-increasing in between.
    """
    eased = ease_out_quad(scroll_progress(scroll_y, max_scroll))
    # keep one frame of margin before the end of the clip
    adjusted_duration = max(0.0, clip_duration - frame_time)
    return (1 - eased) * adjusted_duration
