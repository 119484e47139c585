[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slai"
version = "0.1.0"
description = "GGUF model file reader, chat prompt templating and tensor shape helpers for local LLM inference."
requires-python = ">=3.10"
dependencies = [
    "jinja2",
]
keywords = ["gguf", "llm", "llama", "qwen", "chat-template", "tensor"]
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
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
slai = "slai.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["slai"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
