[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hanabot"
version = "0.1.0"
description = "Chat-bot building blocks: group utilities, banned-word tracking, drift bottles and bilibili link and subscription helpers"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["chat", "bot", "group", "plugins", "bilibili", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hanabot = "hanabot.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hanabot"]

[tool.pytest.ini_options]
addopts = "-ra"
