[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adikplan"
version = "0.1.0"
description = "A simulated step-sequencer drum machine with a mixer, songs and transport controls"
requires-python = ">=3.10"
keywords = ["drum machine", "sequencer", "audio", "mixer", "music"]
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
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
adikplan = "adikplan.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["adikplan"]

[tool.pytest.ini_options]
addopts = "-ra"
