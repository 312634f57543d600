[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "terago"
version = "0.2.0"
description = "Generate technology radar HTML pages from dated YAML snapshots"
requires-python = ">=3.10"
keywords = ["technology radar", "radar", "yaml", "html", "static site"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Documentation",
]
dependencies = [
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
terago = "terago.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["terago"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
