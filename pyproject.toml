[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecohort"
version = "1.0.1"
description = "Urban garden weather log: daily forecast summary and a local SQLite register of weather records"
requires-python = ">=3.10"
dependencies = []
keywords = ["garden", "weather", "forecast", "aemet", "sqlite", "records"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ecohort = "ecohort.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ecohort"]

[tool.hatch.build.targets.sdist]
include = ["ecohort", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
