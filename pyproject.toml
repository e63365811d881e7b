[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hopfieldsim"
version = "0.1.0"
description = "Monte Carlo experiments on binary Hopfield networks: stability, multi-pattern recall and storage capacity versus temperature"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "hopfield",
    "neural-network",
    "associative-memory",
    "monte-carlo",
    "metropolis",
    "simulation",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hopfield-stability = "hopfieldsim.stability:main"
hopfield-several = "hopfieldsim.several:main"
hopfield-storage = "hopfieldsim.storage:main"

[tool.hatch.build.targets.wheel]
packages = ["hopfieldsim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
