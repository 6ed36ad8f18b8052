[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "thorview"
version = "1.0.0"
description = "Load and inspect raw multi-frame image sequences for ML model debugging"
requires-python = ">=3.10"
dependencies = []
keywords = ["image", "sequence", "machine-learning", "visualization", "float32", "raw"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["thorview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
