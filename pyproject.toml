[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ibdshare"
version = "0.1.11"
description = "Data structures and statistics for identity-by-descent (IBD) segment analysis"
requires-python = ">=3.10"
keywords = ["ibd", "identity-by-descent", "genetics", "xirs", "population-genetics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]
dependencies = [
    "intervaltree",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ibdshare"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
