"""Keyboard, mouse and gamepad state with edge detection between frames."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator

from .geometry import Matrix4x4, Vector2, Vector3, inverse, transform_point

KEY_COUNT = 256
MOUSE_BUTTON_COUNT = 8
PRESSED = 0x80

WINDOW_WIDTH = 1280.0
WINDOW_HEIGHT = 720.0

XINPUT_LEFT_THUMB_DEADZONE = 7849
XINPUT_RIGHT_THUMB_DEADZONE = 8689


def _is_down(value: int) -> bool:
    return bool(value & PRESSED)


def _state_bytes(values: Iterable[int], count: int, what: str) -> bytes:
    data = bytes(values)
    if len(data) > count:
        raise ValueError(f"{what} state holds at most {count} entries, got {len(data)}")
    return data.ljust(count, b"\x00")


def _check_index(index: int, count: int, what: str) -> None:
    if not 0 <= index < count:
        raise IndexError(f"{what} {index} out of range 0..{count - 1}")


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


class KeyboardState:
    """The state of all 256 keys in this frame and the previous one."""

    def __init__(self) -> None:
        self._keys = bytes(KEY_COUNT)
        self._previous = bytes(KEY_COUNT)

    @property
    def keys(self) -> bytes:
        return self._keys

    @property
    def previous_keys(self) -> bytes:
        return self._previous

    def update(self, keys: Iterable[int]) -> None:
        """Start a new frame with ``keys``; a key is down when bit 0x80 is set."""
        new_keys = _state_bytes(keys, KEY_COUNT, "keyboard")
        self._previous = self._keys
        self._keys = new_keys

    def _now(self, key: int) -> bool:
        _check_index(key, KEY_COUNT, "key")
        return _is_down(self._keys[key])

    def _before(self, key: int) -> bool:
        _check_index(key, KEY_COUNT, "key")
        return _is_down(self._previous[key])

    def push(self, key: int) -> bool:
        """True while ``key`` is held down."""
        return self._now(key)

    def trigger(self, key: int) -> bool:
        """True only in the frame ``key`` went down."""
        return self._now(key) and not self._before(key)

    def release(self, key: int) -> bool:
        """True while ``key`` is up."""
        return not self._now(key)

    def release_moment(self, key: int) -> bool:
        """True only in the frame ``key`` came up."""
        return not self._now(key) and self._before(key)


@dataclass(frozen=True)
class MouseMove:
    """Relative mouse motion of one frame; ``lz`` is the wheel."""

    lx: int = 0
    ly: int = 0
    lz: int = 0


class MouseState:
    """Mouse buttons, motion and the cursor position inside the window."""

    def __init__(self) -> None:
        self._buttons = bytes(MOUSE_BUTTON_COUNT)
        self._previous_buttons = bytes(MOUSE_BUTTON_COUNT)
        self._move = MouseMove()
        self.position = Vector2(0.0, 0.0)

    def update(self, buttons: Iterable[int], lx: int = 0, ly: int = 0, lz: int = 0) -> None:
        """Start a new frame with button bytes (0:left, 1:right, 2:middle, 3-7:extra)."""
        new_buttons = _state_bytes(buttons, MOUSE_BUTTON_COUNT, "mouse button")
        self._previous_buttons = self._buttons
        self._buttons = new_buttons
        self._move = MouseMove(int(lx), int(ly), int(lz))

    def is_press(self, button: int) -> bool:
        """True while ``button`` is held down."""
        _check_index(button, MOUSE_BUTTON_COUNT, "mouse button")
        return _is_down(self._buttons[button])

    def is_trigger(self, button: int) -> bool:
        """True only in the frame ``button`` went down."""
        _check_index(button, MOUSE_BUTTON_COUNT, "mouse button")
        return _is_down(self._buttons[button]) and not _is_down(self._previous_buttons[button])

    def move(self) -> MouseMove:
        return self._move

    def wheel(self) -> int:
        """Wheel scroll of this frame; positive when turned away from the user."""
        return self._move.lz

    def set_position(self, x: float, y: float) -> Vector2:
        """Record the cursor position in window coordinates."""
        self.position = Vector2(float(x), float(y))
        return self.position

    def position_3d(
        self,
        view: Matrix4x4,
        projection: Matrix4x4,
        depth_factor: float,
        block_size: float = 1.0,
    ) -> Vector3:
        """Unproject the cursor into world space, snapped to ``block_size`` when positive."""
        ndc_x = 2.0 * self.position.x / WINDOW_WIDTH - 1.0
        ndc_y = 1.0 - 2.0 * self.position.y / WINDOW_HEIGHT
        clip = Vector3(ndc_x, ndc_y, depth_factor)

        view_pos = transform_point(clip, inverse(projection))
        world = transform_point(view_pos, inverse(view))

        if block_size > 0.0:
            world = Vector3(
                *(_round_half_away(value / block_size) * block_size for value in world)
            )
        return world


class PadType(Enum):
    DIRECT_INPUT = "DirectInput"
    XINPUT = "XInput"


@dataclass
class Joystick:
    """One connected pad; ``previous_state`` starts equal to ``state``."""

    pad_type: PadType = PadType.XINPUT
    state: Any = None
    previous_state: Any = None
    dead_zone_l: int = XINPUT_LEFT_THUMB_DEADZONE
    dead_zone_r: int = XINPUT_RIGHT_THUMB_DEADZONE
    _initialised: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.previous_state is None:
            self.previous_state = self.state


class JoystickSet:
    """The connected pads, addressed by their connection number."""

    def __init__(self, joysticks: Iterable[Joystick] = ()) -> None:
        self._joysticks: list[Joystick] = list(joysticks)

    def add(self, joystick: Joystick) -> int:
        """Register a pad and return its number."""
        self._joysticks.append(joystick)
        return len(self._joysticks) - 1

    def update(self, index: int, state: Any) -> None:
        """Record a new polled state, keeping the old one as the previous state."""
        _check_index(index, len(self._joysticks), "joystick")
        joystick = self._joysticks[index]
        joystick.previous_state = joystick.state
        joystick.state = state

    def _matching(self, stick_no: int, pad_type: PadType) -> Joystick | None:
        _check_index(stick_no, len(self._joysticks), "joystick")
        joystick = self._joysticks[stick_no]
        return joystick if joystick.pad_type is pad_type else None

    def state(self, stick_no: int, pad_type: PadType) -> Any:
        """Current state of pad ``stick_no``, or None if it is not of ``pad_type``."""
        joystick = self._matching(stick_no, pad_type)
        return None if joystick is None else joystick.state

    def previous_state(self, stick_no: int, pad_type: PadType) -> Any:
        """Previous state of pad ``stick_no``, or None if it is not of ``pad_type``."""
        joystick = self._matching(stick_no, pad_type)
        return None if joystick is None else joystick.previous_state

    def set_dead_zone(self, stick_no: int, dead_zone_l: int, dead_zone_r: int) -> None:
        """Set the stick dead zones (0-32768); unknown pad numbers are ignored."""
        if not 0 <= stick_no < len(self._joysticks):
            return
        joystick = self._joysticks[stick_no]
        joystick.dead_zone_l = dead_zone_l
        joystick.dead_zone_r = dead_zone_r

    def __getitem__(self, stick_no: int) -> Joystick:
        _check_index(stick_no, len(self._joysticks), "joystick")
        return self._joysticks[stick_no]

    def __iter__(self) -> Iterator[Joystick]:
        return iter(self._joysticks)

    def __len__(self) -> int:
        return len(self._joysticks)