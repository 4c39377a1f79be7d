[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "configcenter"
version = "0.1.0"
description = "A small configuration center service: module groups, modules and update-check endpoints."
requires-python = ">=3.10"
keywords = ["configuration", "config-center", "sqlalchemy", "flask", "service"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "sqlalchemy>=2.0",
    "pyyaml>=6.0",
    "flask>=2.3",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
configcenter = "configcenter.main:main"

[tool.hatch.build.targets.wheel]
packages = ["configcenter"]

[tool.pytest.ini_options]
addopts = "-ra"
