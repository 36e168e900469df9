[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mshell"
version = "0.1.0"
description = "Shell core as a library: quoting, variable and wildcard expansion, redirections, here-documents, pipes, && and || lists, and the usual builtins."
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "command-line", "interpreter", "pipes", "redirection", "builtins"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mshell"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
