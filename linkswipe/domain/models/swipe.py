"""
Swipe deck model for the gallery.

The gallery page script mirrors these constants and transitions; keeping them
here makes the pass/open rules testable without a browser.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from linkswipe.domain.models.profile import ProfileModel

SWIPE_THRESHOLD_PX = 90
MAX_ROTATION_DEG = 15.0
ROTATION_DIVISOR = 12.0
MIN_OPACITY = 0.6
OPACITY_FALLOFF_PX = 600.0
FLING_OFFSET_PX = 500
FLING_ROTATION_DEG = 20.0


class SwipeDecision(str, Enum):
    """Outcome of a committed swipe."""

    PASS = "pass"
    OPEN = "open"


@dataclass(frozen=True)
class CardTransform:
    """Visual state of the top card."""

    offset_x: float = 0.0
    rotation: float = 0.0
    opacity: float = 1.0

    @classmethod
    def for_offset(cls, dx: float) -> "CardTransform":
        rotation = max(-MAX_ROTATION_DEG, min(MAX_ROTATION_DEG, dx / ROTATION_DIVISOR))
        opacity = max(MIN_OPACITY, 1 - abs(dx) / OPACITY_FALLOFF_PX)
        return cls(offset_x=dx, rotation=rotation, opacity=opacity)


NEUTRAL_TRANSFORM = CardTransform()


@dataclass
class DragState:
    """Pointer drag tracking: origin, current position and active flag."""

    origin: float = 0.0
    current: float = 0.0
    active: bool = False

    @property
    def offset(self) -> float:
        return self.current - self.origin

    def start(self, x: float) -> None:
        self.origin = x
        self.current = x
        self.active = True

    def move(self, x: float) -> Optional[CardTransform]:
        if not self.active:
            return None
        self.current = x
        return CardTransform.for_offset(self.offset)

    def release(self) -> Optional[SwipeDecision]:
        """End the drag and return the committed decision, if any."""
        if not self.active:
            return None
        dx = self.offset
        self.reset()
        if dx > SWIPE_THRESHOLD_PX:
            return SwipeDecision.OPEN
        if dx < -SWIPE_THRESHOLD_PX:
            return SwipeDecision.PASS
        return None

    def reset(self) -> None:
        self.origin = 0.0
        self.current = 0.0
        self.active = False


@dataclass
class SwipeDeck:
    """
    Ordered deck of approved profiles with a cursor.

    Decisions advance the cursor by one; once the cursor reaches the end the
    deck is exhausted and stays that way.
    """

    profiles: List[ProfileModel] = field(default_factory=list)
    index: int = 0
    drag: DragState = field(default_factory=DragState)
    transform: CardTransform = NEUTRAL_TRANSFORM
    opened_links: List[str] = field(default_factory=list)

    @classmethod
    def from_profiles(cls, profiles: Sequence[ProfileModel]) -> "SwipeDeck":
        return cls(profiles=list(profiles))

    def __len__(self) -> int:
        return len(self.profiles)

    @property
    def current(self) -> Optional[ProfileModel]:
        if self.index < len(self.profiles):
            return self.profiles[self.index]
        return None

    @property
    def is_exhausted(self) -> bool:
        return self.index >= len(self.profiles)

    def decide(self, decision: SwipeDecision) -> Optional[str]:
        """
        Apply a pass/open decision to the current card.

        Returns:
            The link to open for an OPEN decision, otherwise None
        """
        card = self.current
        if card is None:
            return None

        link = None
        if decision == SwipeDecision.OPEN and card.link:
            link = card.link
            self.opened_links.append(link)

        self.index += 1
        self.transform = NEUTRAL_TRANSFORM
        return link

    def pointer_down(self, x: float) -> None:
        if self.is_exhausted:
            return
        self.drag.start(x)

    def pointer_move(self, x: float) -> CardTransform:
        transform = self.drag.move(x)
        if transform is not None:
            self.transform = transform
        return self.transform

    def pointer_up(self) -> Optional[SwipeDecision]:
        """Finish a drag, committing past the threshold or snapping back."""
        if not self.drag.active:
            return None
        decision = self.drag.release()
        if decision is None:
            self.transform = NEUTRAL_TRANSFORM
            return None
        self.decide(decision)
        return decision
