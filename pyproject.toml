[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cartree"
version = "0.1.0"
description = "CART decision trees and bagged tree ensembles for mixed quantitative and qualitative tabular data"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "decision-tree",
    "cart",
    "bagging",
    "gini",
    "regression-tree",
    "classification",
    "graphviz",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
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
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cartree = "cartree.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cartree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
