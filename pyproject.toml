[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rrrgradle"
version = "0.1.0"
description = "A small experimental build tool for Java projects: fetch Maven dependencies, compile, test, run and package."
requires-python = ">=3.11"
dependencies = []
keywords = ["java", "build", "maven", "javac", "jar", "junit"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Programming Language :: Java",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rrrgradle = "rrrgradle.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rrrgradle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
