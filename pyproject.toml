[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crossingguard"
version = "0.1.0"
description = "A small arcade game: guide a line of kids across a busy road while dodging traffic."
requires-python = ">=3.10"
keywords = ["game", "arcade", "pygame", "crossing guard"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
crossingguard = "crossingguard.app:main"

[tool.hatch.build.targets.wheel]
packages = ["crossingguard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
