[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wbless"
version = "0.13.0"
description = "Status bar building blocks: sensor and volume labels, tray bookkeeping, stylesheet watching and process helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["status bar", "tray", "statusnotifier", "pipewire", "applet", "desktop"]
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
    "Topic :: Desktop Environment :: Window Managers :: Applets",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wbless"]

[tool.pytest.ini_options]
addopts = "-ra"
