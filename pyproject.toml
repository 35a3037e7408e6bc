[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sdvkit"
version = "0.1.0"
description = "Building blocks for software-defined-vehicle providers and applications: typed values, intents and fulfillments, an observable key-value store, detection results and dog mode logic."
requires-python = ">=3.10"
dependencies = []
keywords = ["vehicle", "sdv", "intents", "provider", "key-value", "observer", "dog-mode"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["sdvkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
