[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvkernkit"
version = "0.1.0"
description = "Sv39 page tables, RISC-V machine constants, ELF headers, a shell command parser and small Unix-style user tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["riscv", "sv39", "page-table", "elf", "kernel", "shell", "grep", "teaching"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rvk-grep = "rvkernkit.grep:main"
rvk-wc = "rvkernkit.wc:main"
rvk-cat = "rvkernkit.cat:main_cat"
rvk-echo = "rvkernkit.cat:main_echo"
rvk-ls = "rvkernkit.fileutils:main_ls"
rvk-ln = "rvkernkit.fileutils:main_ln"
rvk-mkdir = "rvkernkit.fileutils:main_mkdir"
rvk-rm = "rvkernkit.fileutils:main_rm"
rvk-kill = "rvkernkit.fileutils:main_kill"

[tool.hatch.build.targets.wheel]
packages = ["rvkernkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
