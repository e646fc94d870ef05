[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvuser"
version = "0.1.0"
description = "User-space tools, binary formats and synchronisation primitives of a small RISC-V teaching operating system"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating-system",
    "risc-v",
    "sv39",
    "elf",
    "virtio",
    "shell",
    "grep",
    "semaphore",
    "malloc",
    "teaching",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rv-grep = "rvuser.grep:main"
rv-wc = "rvuser.wc:main"
rv-cat = "rvuser.cat:main"
rv-echo = "rvuser.echo:main"
rv-ls = "rvuser.ls:main"
rv-kill = "rvuser.fileops:kill_main"
rv-ln = "rvuser.fileops:ln_main"
rv-mkdir = "rvuser.fileops:mkdir_main"
rv-rm = "rvuser.fileops:rm_main"
rv-producer-consumer = "rvuser.producer_consumer:main"
rv-threads = "rvuser.threads:main"
rv-sh = "rvuser.sh:main"

[tool.hatch.build.targets.wheel]
packages = ["rvuser"]

[tool.hatch.build.targets.sdist]
include = ["rvuser", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
