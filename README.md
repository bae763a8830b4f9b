# enginekit

Building blocks for a small game engine. It uses only the standard library.

## Modules

- `enginekit.frame`: `FrameTimer(clock=time.perf_counter)` measures the
  seconds between calls to `update()` (`delta_time`). It also keeps an
  average `fps`, which is recomputed once at least half a second has passed
  since the last recomputation. `reset()` restarts the timing from the
  current clock value.
- `enginekit.geometry`: frozen `Vector2` and `Vector3` value types.
  `Vector3` has `length`, `normalize`, `dot` and `cross`. `Matrix4x4` uses
  row vectors, keeps translation in the last row and multiplies with `@`.
  The collision shapes are `Sphere`, `AABB` and `OBB`, where an `OBB`'s
  `size` holds half extents. Helpers: `make_rotate_x_matrix`,
  `make_rotate_y_matrix`, `make_rotate_z_matrix`, `make_rotate_xyz_matrix`,
  `inverse` (raises `ValueError` for a singular matrix), `transform_point`,
  `make_obb_world_matrix` and `obb_to_local_aabb`.
- `enginekit.collision`: intersection tests `sphere_sphere`, `aabb_aabb`,
  `aabb_sphere`, `obb_sphere`, `obb_obb` (separating axes) and `aabb_obb`.
  The projections `project_obb` and `project_aabb` return `(min, max)`.
  `CollisionManager` does the following:
  - `add_collider` registers colliders under unique names.
  - `check_all_collisions` checks each enabled pair once.
  - It calls `on_collision_enter`, `on_collision` and `on_collision_out` on
    both colliders of a pair.
  - `update_world_transform` refreshes the shapes and colours the colliders
    that were hit.
  - `update()` runs both steps.
  - `debug_lines()` yields the outline segments of every registered
    collider.
- `enginekit.collider`: the `Collider` base class.
  - Its sphere, AABB and OBB follow `center_position()` and
    `center_rotation()`. By default these return the `position` and
    `rotation` attributes.
  - `set_collision_type(CollisionType.SPHERE | AABB | OBB)` keeps exactly
    one shape enabled.
  - The default callbacks keep a `contacts` set and a `last_contact`.
  - `save()` and `load()` persist the flags and shape offsets in
    `<data_root>/Collider/<name>.json`.
- `enginekit.datastore`: `DataHandler(folder, file, base_path)` stores
  values under keys in `<base_path>/<folder>/<file>.json`. `load(key,
  default)` converts the stored value to the type of `default`. It returns
  `default` when the file or key is missing or the value does not fit, and
  reports the conversion error on stderr.
- `enginekit.offscreen`: `OffScreenSettings` holds the selected
  `ShaderMode` and the parameters of each effect:
  - `VignetteParams`
  - `GaussianParams`
  - `RadialBlurParams`
  - `CinematicParams`
  - smoothing and depth kernel sizes

  `save()` writes everything to one JSON file. `load()` reads the mode back
  and `load_mode(mode)` reads one mode's parameters. The smoothing kernel
  size is written under `smooth_kernelSize` but read from
  `somooth_kernelSize`, so a saved value is not restored.
- `enginekit.level`: `LevelData(directory).load_json(name)` reads an
  `objects` list of named transforms and remaps their axes. Translation
  `(x, y, z)` becomes `(y, z, x)`. Rotation and scale become `(x, z, y)`.
  `translation_by_name`, `rotation_by_name` and `scale_by_name` raise
  `KeyError` for an unknown name.
- `enginekit.input`: these classes keep the current and previous state and
  answer press, trigger and release queries:
  - `KeyboardState`: 256 keys; a key is down when bit `0x80` is set.
  - `MouseState`: 8 buttons, motion and wheel. `position_3d` unprojects
    the cursor into world space for a 1280×720 window and can snap the
    result to a grid.
  - `JoystickSet`: `Joystick` entries of a given `PadType`, with dead
    zones.
- `enginekit.logger`: `log(message)` writes the message at DEBUG level to
  the `enginekit.logger` logger.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from enginekit.collider import Collider
from enginekit.collision import CollisionManager
from enginekit.geometry import Vector3


class Ball(Collider):
    def on_collision_enter(self, other):
        super().on_collision_enter(other)
        print("hit", other.name)


manager = CollisionManager()
a = Ball().add_collider("ball", manager, "data")
b = Ball().add_collider("ball", manager, "data")
b.position = Vector3(0.5, 0.0, 0.0)

manager.update_world_transform()   # place the shapes around each centre
manager.check_all_collisions()     # prints "hit ball_1" and "hit ball"
print(a.name, b.name, b in a.contacts)   # ball ball_1 True
```

When a name is already registered, the manager adds a suffix. The first
collider keeps `ball`, the next is renamed `ball_1`, then `ball_2`, and so on.

## What it does not do

The package does no drawing, opens no window and reads no devices.

- Colliders and the manager produce debug line segments. Drawing them is up
  to your renderer.
- The off-screen settings only hold and store effect parameters. They run
  no shaders.
- Level objects carry a model file name (`<name>.obj`). The package loads
  no models.
- Keyboard, mouse and gamepad states are whatever the caller passes to
  `update()`. The package does no polling of its own.