[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxelterrain"
version = "0.1.0"
description = "Chunked marching-cubes voxel terrain with Perlin heightmaps, spherical digging and foliage scattering"
requires-python = ">=3.10"
dependencies = []
keywords = ["marching cubes", "voxel", "terrain", "procedural", "mesh", "perlin noise"]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voxelterrain"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
