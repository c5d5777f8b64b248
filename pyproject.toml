[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quadpress"
version = "0.1.0"
description = "Quadtree-based lossy image compression with selectable error measures and target compression search"
requires-python = ">=3.10"
keywords = ["image", "compression", "quadtree", "variance", "entropy"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
    "pillow",
]

[project.scripts]
quadpress = "quadpress.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["quadpress"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
