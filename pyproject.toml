[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "enginekit"
version = "0.1.0"
description = "Frame timing, collision detection, input state, level loading and post-effect settings for small game engines"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "engine", "collision", "obb", "aabb", "input", "frame-timing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["enginekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
