[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rawisp"
version = "0.1.0"
description = "Bit-accurate reference models of the stages of a streaming camera image signal processor"
requires-python = ">=3.10"
dependencies = []
keywords = ["isp", "image signal processing", "bayer", "demosaic", "raw", "yuv", "camera"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rawisp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
