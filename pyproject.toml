[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "palletkit"
version = "3.0.0"
description = "In-memory runtime modules: events, storage maps, fixed-point accumulators, ring-buffer queues, currencies and crowdfunding"
requires-python = ">=3.10"
dependencies = []
keywords = ["runtime", "pallet", "storage", "events", "crowdfund", "ringbuffer", "fixed-point"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["palletkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
