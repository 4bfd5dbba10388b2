[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quarkcoal"
version = "0.1.0"
description = "Quark coalescence model: combine partons into hadrons, identify them and analyse the resulting events"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = ["physics", "heavy-ion", "coalescence", "hadronization", "partons", "chiral vortical effect"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
quarkcoal = "quarkcoal.cli:main"
quarkcoal-analysis = "quarkcoal.analysis_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["quarkcoal"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
