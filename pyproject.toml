[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "inkframe"
version = "0.7.0"
description = "E-ink framebuffer drawing, partial refresh control and button event decoding for RGB565 displays"
requires-python = ">=3.10"
keywords = ["framebuffer", "e-ink", "epaper", "rgb565", "mxcfb", "evdev", "drawing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "pillow>=10.1",
    "zstandard",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["inkframe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
