import pytest

from enginekit.geometry import Matrix4x4, Vector3
from enginekit.input import (
    Joystick,
    JoystickSet,
    KeyboardState,
    MouseMove,
    MouseState,
    PadType,
    XINPUT_LEFT_THUMB_DEADZONE,
    XINPUT_RIGHT_THUMB_DEADZONE,
)


def keys_with(*pressed):
    data = bytearray(256)
    for key in pressed:
        data[key] = 0x80
    return bytes(data)


def translation(t):
    return Matrix4x4(((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (t.x, t.y, t.z, 1)))


def test_keyboard_trigger_only_on_first_frame():
    kb = KeyboardState()
    kb.update(keys_with(30))
    assert kb.push(30) is True
    assert kb.trigger(30) is True
    kb.update(keys_with(30))
    assert kb.push(30) is True
    assert kb.trigger(30) is False


def test_keyboard_release_moment():
    kb = KeyboardState()
    kb.update(keys_with(5))
    kb.update(keys_with())
    assert kb.release(5) is True
    assert kb.release_moment(5) is True
    kb.update(keys_with())
    assert kb.release_moment(5) is False


def test_keyboard_only_high_bit_counts():
    kb = KeyboardState()
    data = bytearray(256)
    data[7] = 0x7F
    kb.update(data)
    assert kb.push(7) is False
    assert kb.release(7) is True


def test_keyboard_short_state_is_padded():
    kb = KeyboardState()
    kb.update([0x80])
    assert kb.push(0) is True
    assert kb.push(255) is False
    assert len(kb.keys) == 256


def test_keyboard_rejects_long_state_and_bad_key():
    kb = KeyboardState()
    with pytest.raises(ValueError):
        kb.update(bytes(257))
    with pytest.raises(IndexError):
        kb.push(256)


def test_mouse_press_and_trigger():
    mouse = MouseState()
    mouse.update([0x80, 0, 0x80])
    assert mouse.is_press(0) is True
    assert mouse.is_trigger(2) is True
    assert mouse.is_press(1) is False
    mouse.update([0x80, 0, 0])
    assert mouse.is_trigger(0) is False
    assert mouse.is_press(2) is False


def test_mouse_bad_button():
    mouse = MouseState()
    with pytest.raises(IndexError):
        mouse.is_press(8)


def test_mouse_move_and_wheel():
    mouse = MouseState()
    mouse.update([], 3, -4, 120)
    assert mouse.move() == MouseMove(3, -4, 120)
    assert mouse.wheel() == 120


def test_position_3d_center_is_origin_with_identity():
    mouse = MouseState()
    mouse.set_position(640, 360)
    result = mouse.position_3d(Matrix4x4.identity(), Matrix4x4.identity(), 0.0)
    assert result == Vector3(0.0, 0.0, 0.0)


def test_position_3d_corner_without_snapping():
    mouse = MouseState()
    mouse.set_position(0, 0)
    result = mouse.position_3d(Matrix4x4.identity(), Matrix4x4.identity(), 0.25, 0.0)
    assert result.x == pytest.approx(-1.0)
    assert result.y == pytest.approx(1.0)
    assert result.z == pytest.approx(0.25)


def test_position_3d_snaps_half_away_from_zero():
    mouse = MouseState()
    mouse.set_position(1280, 720)
    result = mouse.position_3d(Matrix4x4.identity(), Matrix4x4.identity(), 0.0, 2.0)
    assert result.x == pytest.approx(2.0)
    assert result.y == pytest.approx(-2.0)


def test_position_3d_view_translation_shifts_result():
    mouse = MouseState()
    mouse.set_position(100, 200)
    offset = Vector3(1.5, -2.0, 3.0)
    base = mouse.position_3d(Matrix4x4.identity(), Matrix4x4.identity(), 0.5, 0.0)
    moved = mouse.position_3d(translation(offset), Matrix4x4.identity(), 0.5, 0.0)
    diff = moved - base
    assert diff.x == pytest.approx(-offset.x)
    assert diff.y == pytest.approx(-offset.y)
    assert diff.z == pytest.approx(-offset.z)


def test_joystick_previous_starts_equal_and_shifts():
    pads = JoystickSet()
    index = pads.add(Joystick(PadType.XINPUT, state={"buttons": 0}))
    assert pads.previous_state(index, PadType.XINPUT) == {"buttons": 0}
    pads.update(index, {"buttons": 1})
    assert pads.state(index, PadType.XINPUT) == {"buttons": 1}
    assert pads.previous_state(index, PadType.XINPUT) == {"buttons": 0}


def test_joystick_wrong_type_gives_none():
    pads = JoystickSet()
    pads.add(Joystick(PadType.DIRECT_INPUT, state="di"))
    assert pads.state(0, PadType.XINPUT) is None
    assert pads.state(0, PadType.DIRECT_INPUT) == "di"


def test_joystick_bad_index_raises():
    pads = JoystickSet()
    with pytest.raises(IndexError):
        pads.state(0, PadType.XINPUT)
    with pytest.raises(IndexError):
        pads.update(-1, "x")


def test_dead_zone_defaults_and_setting():
    pads = JoystickSet()
    pads.add(Joystick(PadType.XINPUT, state=0))
    assert pads[0].dead_zone_l == XINPUT_LEFT_THUMB_DEADZONE == 7849
    assert pads[0].dead_zone_r == XINPUT_RIGHT_THUMB_DEADZONE == 8689
    pads.set_dead_zone(0, 100, 200)
    assert (pads[0].dead_zone_l, pads[0].dead_zone_r) == (100, 200)
    pads.set_dead_zone(5, 1, 1)
    assert len(pads) == 1
    assert pads[0].dead_zone_l == 100