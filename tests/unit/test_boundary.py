"""Unit tests for the boundary and orientation engine."""

import math

import pytest

from luminaire.domain import ComponentBounds, ComponentType, RoomDimensions, constrain
from luminaire.domain.services import (
    HORIZONTAL_ROTATION,
    TrackZone,
    clamp_to_room,
    component_bounds,
    detect_track_zones,
    is_position_valid,
)

UNIT = (1.0, 1.0, 1.0)
ZERO = (0.0, 0.0, 0.0)


def _inside(position, type_tag, scale, room, eps: float = 1e-9) -> bool:
    bounds = component_bounds(type_tag, scale)
    return all(
        lo - eps <= p + b_min and p + b_max <= hi + eps
        for p, lo, hi, b_min, b_max in zip(
            position, room.min_corner, room.max_corner, bounds.min, bounds.max
        )
    )


class TestComponentBounds:
    """Tests for the per-type bounds table."""

    def test_track_bounds_scaled(self) -> None:
        """Test that track bounds follow the scale."""
        bounds = component_bounds(ComponentType.TRACK, (2.0, 1.0, 1.0))

        assert bounds.min == pytest.approx((-2.0, -0.05, -0.1))
        assert bounds.max == pytest.approx((2.0, 0.05, 0.1))

    def test_profile_shares_track_bounds(self) -> None:
        """Test that profiles use the track box."""
        assert component_bounds(ComponentType.PROFILE) == component_bounds(ComponentType.TRACK)

    def test_unlisted_type_uses_default(self) -> None:
        """Test the default box for types without an entry."""
        bounds = component_bounds(ComponentType.ACCESSORY)

        assert bounds.max == pytest.approx((0.25, 0.25, 0.25))


class TestClampAndValidity:
    """Tests for clamp_to_room and is_position_valid."""

    def test_clamp_moves_box_inside(self, room: RoomDimensions) -> None:
        """Test that each axis is clamped independently."""
        bounds = component_bounds(ComponentType.SPOTLIGHT)

        assert clamp_to_room((5.0, -1.0, 0.5), room, bounds) == pytest.approx((1.9, 0.15, 0.5))

    def test_oversized_box_sticks_to_lower_wall(self) -> None:
        """Test that a box larger than the room is held against the low wall."""
        room = RoomDimensions(width=0.1, depth=4.0, height=3.0)
        bounds = component_bounds(ComponentType.SPOTLIGHT)

        x, _, _ = clamp_to_room((1.0, 1.0, 0.0), room, bounds)

        assert x == pytest.approx(0.05)

    @pytest.mark.parametrize(
        "position,expected",
        [
            ((0.0, 1.0, 0.0), True),
            ((1.905, 1.0, 0.0), True),
            ((2.0, 1.0, 0.0), False),
            ((0.0, 0.045, 0.0), True),
            ((0.0, -0.1, 0.0), False),
        ],
    )
    def test_is_position_valid_default_bounds(
        self, room: RoomDimensions, position, expected: bool
    ) -> None:
        """Test containment with the default box and 1cm tolerance."""
        assert is_position_valid(position, room) is expected

    def test_is_position_valid_with_bounds(self, room: RoomDimensions) -> None:
        """Test containment with explicit bounds."""
        bounds = ComponentBounds(min=(-1.0, -0.05, -0.1), max=(1.0, 0.05, 0.1))

        assert is_position_valid((0.5, 2.0, 0.0), room, bounds)
        assert not is_position_valid((1.5, 2.0, 0.0), room, bounds)


class TestTrackZones:
    """Tests for detect_track_zones."""

    def test_open_space(self, room: RoomDimensions) -> None:
        """Test a position far from every boundary."""
        assert detect_track_zones((0.0, 1.5, 0.0), room) == frozenset()

    def test_corner(self, room: RoomDimensions) -> None:
        """Test a position touching ceiling, left wall and front wall."""
        zones = detect_track_zones((-1.9, 2.9, 1.9), room)

        assert zones == {TrackZone.CEILING, TrackZone.LEFT_WALL, TrackZone.FRONT_WALL}


class TestConstrainTracks:
    """Tests for the track orientation override."""

    def test_track_near_ceiling(self) -> None:
        """Test that a track near an 3m ceiling drops to 2m and lies flat."""
        room = RoomDimensions(width=8.0, depth=6.0, height=3.0)

        result = constrain(ComponentType.TRACK, (0.0, 2.9, 0.0), ZERO, UNIT, room)

        assert result.rotation == pytest.approx((math.pi / 2, 0.0, 0.0))
        assert result.position == pytest.approx((0.0, 2.0, 0.0))
        assert result.was_corrected
        assert result.reason == "Track positioned horizontally well below ceiling"

    def test_ceiling_drop_uses_room_height_when_lower(self) -> None:
        """Test that a low ceiling puts the track 1m below it."""
        room = RoomDimensions(width=4.0, depth=4.0, height=2.5)

        result = constrain(ComponentType.TRACK, (0.0, 2.4, 0.0), ZERO, UNIT, room)

        assert result.position[1] == pytest.approx(1.5)

    def test_track_near_left_wall(self, room: RoomDimensions) -> None:
        """Test that a short track is pulled to the left wall inset."""
        scale = (0.1, 1.0, 1.0)

        result = constrain(ComponentType.TRACK, (-1.9, 1.5, 0.0), ZERO, scale, room)

        assert result.position == pytest.approx((-1.85, 1.5, 0.0))
        assert result.rotation == HORIZONTAL_ROTATION
        assert result.reason.startswith("Track forced horizontal along left wall")

    def test_track_near_right_wall(self, room: RoomDimensions) -> None:
        """Test the right wall inset."""
        result = constrain(ComponentType.TRACK, (1.95, 1.5, 0.0), ZERO, (0.1, 1.0, 1.0), room)

        assert result.position[0] == pytest.approx(1.85)
        assert "along right wall" in result.reason

    def test_track_near_back_wall(self, room: RoomDimensions) -> None:
        """Test the back wall inset."""
        result = constrain(ComponentType.TRACK, (0.0, 1.5, -1.95), ZERO, UNIT, room)

        assert result.position == pytest.approx((0.0, 1.5, -1.85))
        assert "along back wall" in result.reason

    def test_track_in_corner(self, room: RoomDimensions) -> None:
        """Test that corners apply the first rules and mention the corner."""
        result = constrain(
            ComponentType.TRACK, (-1.9, 2.9, -1.9), ZERO, (0.1, 1.0, 1.0), room
        )

        assert result.position == pytest.approx((-1.85, 2.0, -1.9))
        assert result.rotation == HORIZONTAL_ROTATION
        assert "at corner" in result.reason

    def test_track_in_open_space_is_laid_flat(self, room: RoomDimensions) -> None:
        """Test that tracks are forced horizontal even in open space."""
        result = constrain(ComponentType.TRACK, (0.0, 1.5, 0.0), (0.0, 0.3, 0.0), UNIT, room)

        assert result.position == pytest.approx((0.0, 1.5, 0.0))
        assert result.rotation == HORIZONTAL_ROTATION
        assert result.was_corrected
        assert result.reason == "Track forced horizontal in open space"

    def test_profile_is_clamped_but_not_reoriented(self, room: RoomDimensions) -> None:
        """Test that only tracks get the orientation override."""
        rotation = (0.0, 0.3, 0.0)

        result = constrain(ComponentType.PROFILE, (0.0, 2.9, 0.0), rotation, UNIT, room)

        assert result.rotation == rotation
        assert result.position == pytest.approx((0.0, 2.9, 0.0))
        assert not result.was_corrected


class TestConstrainOtherTypes:
    """Tests for clamping of non-track components."""

    def test_spotlight_outside_room(self, room: RoomDimensions) -> None:
        """Test that a spotlight outside the room is pulled back in."""
        rotation = (0.1, 0.2, 0.3)

        result = constrain(ComponentType.SPOTLIGHT, (5.0, -1.0, 0.0), rotation, UNIT, room)

        assert result.position == pytest.approx((1.9, 0.15, 0.0))
        assert result.rotation == rotation
        assert result.was_corrected
        assert result.reason == "Position constrained to room boundaries"

    def test_inside_room_untouched(self, room: RoomDimensions) -> None:
        """Test that nothing is reported for a valid placement."""
        result = constrain(ComponentType.CONNECTOR, (0.0, 2.9, 0.0), ZERO, UNIT, room)

        assert result.position == (0.0, 2.9, 0.0)
        assert not result.was_corrected
        assert result.reason is None

    def test_small_correction_not_reported(self, room: RoomDimensions) -> None:
        """Test that moves within 1cm do not count as corrections."""
        result = constrain(ComponentType.SPOTLIGHT, (1.905, 1.0, 0.0), ZERO, UNIT, room)

        assert result.position[0] == pytest.approx(1.9)
        assert not result.was_corrected

    @pytest.mark.parametrize("type_tag", list(ComponentType))
    def test_degenerate_room(self, type_tag: ComponentType) -> None:
        """Test that a zero-width room leaves the input unchanged."""
        room = RoomDimensions(width=0.0, depth=6.0, height=3.0)
        position = (1.0, 2.0, 3.0)
        rotation = (0.1, 0.2, 0.3)

        result = constrain(type_tag, position, rotation, UNIT, room)

        assert result.position == position
        assert result.rotation == rotation
        assert not result.was_corrected
        assert "Degenerate room" in result.reason
        assert not any(math.isnan(v) for v in result.position)


SAMPLE_POSITIONS = [
    (0.0, 1.5, 0.0),
    (0.0, 2.9, 0.0),
    (-5.0, 10.0, 7.0),
    (3.9, -2.0, -3.9),
    (-1.9, 2.9, -1.9),
    (1.95, 0.01, 1.95),
    (0.3, 2.6, -2.2),
]
SAMPLE_SCALES = [UNIT, (0.1, 1.0, 1.0), (2.0, 0.5, 2.0)]


@pytest.mark.property
class TestConstrainProperties:
    """Idempotence and containment over sampled inputs."""

    @pytest.mark.parametrize("type_tag", list(ComponentType))
    @pytest.mark.parametrize("position", SAMPLE_POSITIONS)
    @pytest.mark.parametrize("scale", SAMPLE_SCALES)
    def test_idempotent(self, room: RoomDimensions, type_tag, position, scale) -> None:
        """Test that constraining a constrained result changes nothing."""
        first = constrain(type_tag, position, (0.2, 0.0, 0.0), scale, room)
        second = constrain(type_tag, first.position, first.rotation, scale, room)

        assert second.position == first.position
        assert second.rotation == first.rotation
        assert not second.was_corrected

    @pytest.mark.parametrize("type_tag", list(ComponentType))
    @pytest.mark.parametrize("position", SAMPLE_POSITIONS)
    @pytest.mark.parametrize("scale", SAMPLE_SCALES)
    def test_contained(self, room: RoomDimensions, type_tag, position, scale) -> None:
        """Test that the scaled box always ends inside the room."""
        result = constrain(type_tag, position, ZERO, scale, room)

        assert _inside(result.position, type_tag, scale, room)
