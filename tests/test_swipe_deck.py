import pytest

from linkswipe.domain.models.profile import ProfileModel, ProfileStatus
from linkswipe.domain.models.swipe import (
    MAX_ROTATION_DEG,
    MIN_OPACITY,
    NEUTRAL_TRANSFORM,
    SWIPE_THRESHOLD_PX,
    CardTransform,
    SwipeDecision,
    SwipeDeck,
)


def make_profiles(count: int):
    return [
        ProfileModel(
            _id=f"id-{i}",
            name=f"Profile {i}",
            description="About me",
            platform="Instagram",
            link=f"https://instagram.com/p{i}",
            photoUrl=f"https://blobs.test/p{i}.png",
            status=ProfileStatus.APPROVED,
        )
        for i in range(count)
    ]


def drag(deck: SwipeDeck, dx: float):
    deck.pointer_down(200)
    deck.pointer_move(200 + dx)
    return deck.pointer_up()


def test_passing_every_card_exhausts_deck():
    deck = SwipeDeck.from_profiles(make_profiles(4))

    for _ in range(4):
        assert deck.decide(SwipeDecision.PASS) is None

    assert deck.is_exhausted
    assert deck.current is None
    assert deck.opened_links == []


def test_exhausted_deck_stays_exhausted():
    deck = SwipeDeck.from_profiles(make_profiles(1))
    deck.decide(SwipeDecision.PASS)

    assert deck.decide(SwipeDecision.OPEN) is None
    assert drag(deck, 300) is None
    assert deck.index == 1


def test_empty_deck_is_exhausted_from_the_start():
    deck = SwipeDeck.from_profiles([])

    assert len(deck) == 0
    assert deck.is_exhausted


def test_right_drag_past_threshold_opens_link_and_advances():
    profiles = make_profiles(3)
    deck = SwipeDeck.from_profiles(profiles)

    decision = drag(deck, SWIPE_THRESHOLD_PX + 1)

    assert decision == SwipeDecision.OPEN
    assert deck.opened_links == [profiles[0].link]
    assert deck.index == 1
    assert deck.current is profiles[1]
    assert deck.transform == NEUTRAL_TRANSFORM


def test_left_drag_past_threshold_passes():
    deck = SwipeDeck.from_profiles(make_profiles(2))

    decision = drag(deck, -(SWIPE_THRESHOLD_PX + 1))

    assert decision == SwipeDecision.PASS
    assert deck.index == 1
    assert deck.opened_links == []


@pytest.mark.parametrize("dx", [0, 40, -40, SWIPE_THRESHOLD_PX, -SWIPE_THRESHOLD_PX])
def test_short_drag_snaps_back(dx):
    """Drags up to the threshold, inclusive, leave the cursor where it was."""
    deck = SwipeDeck.from_profiles(make_profiles(2))

    decision = drag(deck, dx)

    assert decision is None
    assert deck.index == 0
    assert deck.transform == NEUTRAL_TRANSFORM
    assert not deck.drag.active


def test_move_without_press_is_ignored():
    deck = SwipeDeck.from_profiles(make_profiles(1))

    assert deck.pointer_move(500) == NEUTRAL_TRANSFORM
    assert deck.pointer_up() is None
    assert deck.index == 0


def test_transform_tracks_drag():
    transform = CardTransform.for_offset(60)

    assert transform.offset_x == 60
    assert transform.rotation == pytest.approx(5.0)
    assert transform.opacity == pytest.approx(0.9)


@pytest.mark.parametrize("dx", [1000, -1000])
def test_transform_is_clamped(dx):
    transform = CardTransform.for_offset(dx)

    assert abs(transform.rotation) == MAX_ROTATION_DEG
    assert transform.opacity == MIN_OPACITY
