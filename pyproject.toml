[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dxsamples"
version = "0.1.0"
description = "Bio-Rad PIC to field-file conversion, mouse-driven camera interactors and sample data modules"
requires-python = ">=3.10"
dependencies = []
keywords = ["visualization", "biorad", "pic", "microscopy", "confocal", "camera", "interactor"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pic2dx = "dxsamples.pic2dx:main"

[tool.hatch.build.targets.wheel]
packages = ["dxsamples"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
