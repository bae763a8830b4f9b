"""Post-processing settings for the off-screen pass, persisted as one JSON file."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Union

from .geometry import Matrix4x4, Vector2, inverse

DEFAULT_PATH = "resources/jsons/OffScreen/offscreen.json"

# The key the smooth kernel size is read back from; it differs from the key
# it is saved under, so a saved smooth kernel size is not restored.
_SMOOTH_SAVE_KEY = "smooth_kernelSize"
_SMOOTH_LOAD_KEY = "somooth_kernelSize"


class ShaderMode(Enum):
    """Post effect applied to the off-screen image; values are the stored names."""

    NONE = "kNone"
    GRAY = "kGray"
    VIGNETTE = "kVigneet"
    SMOOTH = "kSmooth"
    GAUSS = "kGauss"
    OUTLINE = "kOutLine"
    DEPTH = "kDepth"
    BLUR = "kBlur"
    CINEMATIC = "kCinematic"


@dataclass
class KernelSettings:
    kernel_size: int = 3


@dataclass
class GaussianParams:
    kernel_size: int = 3
    sigma: float = 1.0


@dataclass
class VignetteParams:
    strength: float = 1.0
    radius: float = 1.0
    exponent: float = 1.0
    center: Vector2 = field(default_factory=lambda: Vector2(0.5, 0.5))


@dataclass
class DepthParams:
    projection_inverse: Matrix4x4 = field(default_factory=Matrix4x4.identity)
    kernel_size: int = 3


@dataclass
class RadialBlurParams:
    center: Vector2 = field(default_factory=lambda: Vector2(0.5, 0.5))
    blur_width: float = 0.01


@dataclass
class CinematicParams:
    resolution: Vector2 = field(default_factory=lambda: Vector2(1280.0, 720.0))
    contrast: float = 1.05
    saturation: float = 0.68
    brightness: float = 0.13


EffectParams = Union[
    KernelSettings, GaussianParams, VignetteParams, DepthParams, RadialBlurParams, CinematicParams
]


def _number(value: Any, key: str) -> Any:
    if isinstance(value, (bool, int, float)):
        return value
    raise TypeError(f"{key}: type must be number, but is {type(value).__name__}")


def _float(data: dict[str, Any], key: str) -> float:
    return float(_number(data[key], key))


def _int(data: dict[str, Any], key: str) -> int:
    return int(_number(data[key], key))


def _vector2(data: dict[str, Any], key: str) -> Vector2:
    value = data[key]
    return Vector2(float(_number(value[0], key)), float(_number(value[1], key)))


class OffScreenSettings:
    """The selected shader mode and the parameters of every effect."""

    def __init__(self, path: str | Path = DEFAULT_PATH) -> None:
        self.path = Path(path)
        self.shader_mode = ShaderMode.NONE
        self.smooth = KernelSettings()
        self.gaussian = GaussianParams()
        self.vignette = VignetteParams()
        self.depth = DepthParams()
        self.radial = RadialBlurParams()
        self.cinematic = CinematicParams()
        self.load()
        self.load_mode(self.shader_mode)

    def set_projection(self, projection: Matrix4x4) -> None:
        """Give the depth effect the inverse of the camera projection."""
        self.depth.projection_inverse = inverse(projection)

    def select_mode(self, shader_mode: ShaderMode) -> None:
        """Switch to ``shader_mode`` and load its stored parameters."""
        self.shader_mode = shader_mode
        self.load_mode(shader_mode)

    def active_parameters(self) -> EffectParams | None:
        """Parameters the current mode draws with; None for modes without any."""
        return {
            ShaderMode.VIGNETTE: self.vignette,
            ShaderMode.SMOOTH: self.smooth,
            ShaderMode.GAUSS: self.gaussian,
            ShaderMode.DEPTH: self.depth,
            ShaderMode.BLUR: self.radial,
            ShaderMode.CINEMATIC: self.cinematic,
        }.get(self.shader_mode)

    def save(self) -> None:
        """Write the mode and all effect parameters to the settings file."""
        data = {
            "shaderMode": self.shader_mode.value,
            "vignette_Exponent": self.vignette.exponent,
            "vignette_Radius": self.vignette.radius,
            "vignette_Strength": self.vignette.strength,
            "vignette_Center": [self.vignette.center.x, self.vignette.center.y],
            _SMOOTH_SAVE_KEY: self.smooth.kernel_size,
            "gaussian_kernelSize": self.gaussian.kernel_size,
            "gaussian_sigma": self.gaussian.sigma,
            "depth_kernelSize": self.depth.kernel_size,
            "radial_BlurWidth": self.radial.blur_width,
            "radial_Center": [self.radial.center.x, self.radial.center.y],
            "cinematic_contrast": self.cinematic.contrast,
            "cinematic_saturation": self.cinematic.saturation,
            "cinematic_brightness": self.cinematic.brightness,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=4, sort_keys=True)

    def _read(self) -> dict[str, Any] | None:
        try:
            with self.path.open(encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            print(f"Error: {self.path.name} not found!", file=sys.stderr)
            return None

    def load(self) -> None:
        """Read the stored shader mode; unknown or missing names select NONE."""
        data = self._read()
        if data is None:
            return
        name = data.get("shaderMode")
        try:
            self.shader_mode = ShaderMode(name) if isinstance(name, str) else ShaderMode.NONE
        except ValueError:
            self.shader_mode = ShaderMode.NONE

    def load_mode(self, shader_mode: ShaderMode) -> None:
        """Read the stored parameters of ``shader_mode`` only."""
        data = self._read()
        if data is None:
            return

        if shader_mode is ShaderMode.VIGNETTE:
            if "vignette_Exponent" in data:
                self.vignette.exponent = _float(data, "vignette_Exponent")
            if "vignette_Radius" in data:
                self.vignette.radius = _float(data, "vignette_Radius")
            if "vignette_Strength" in data:
                self.vignette.strength = _float(data, "vignette_Strength")
            if "vignette_Center" in data:
                self.vignette.center = _vector2(data, "vignette_Center")
        elif shader_mode is ShaderMode.SMOOTH:
            if _SMOOTH_LOAD_KEY in data:
                self.smooth.kernel_size = _int(data, _SMOOTH_LOAD_KEY)
        elif shader_mode is ShaderMode.GAUSS:
            if "gaussian_kernelSize" in data:
                self.gaussian.kernel_size = _int(data, "gaussian_kernelSize")
            if "gaussian_sigma" in data:
                self.gaussian.sigma = _float(data, "gaussian_sigma")
        elif shader_mode is ShaderMode.DEPTH:
            if "depth_kernelSize" in data:
                self.depth.kernel_size = _int(data, "depth_kernelSize")
        elif shader_mode is ShaderMode.BLUR:
            if "radial_BlurWidth" in data:
                self.radial.blur_width = _float(data, "radial_BlurWidth")
            if "radial_Center" in data:
                self.radial.center = _vector2(data, "radial_Center")
        elif shader_mode is ShaderMode.CINEMATIC:
            if "cinematic_contrast" in data:
                self.cinematic.contrast = _float(data, "cinematic_contrast")
            if "cinematic_saturation" in data:
                self.cinematic.saturation = _float(data, "cinematic_saturation")
            if "cinematic_brightness" in data:
                self.cinematic.brightness = _float(data, "cinematic_brightness")