[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procnetparse"
version = "0.17.0"
description = "Parsers for Linux /proc networking tables, partitions and pressure stall information"
requires-python = ">=3.10"
dependencies = []
keywords = ["procfs", "proc", "linux", "network", "snmp", "pressure", "partitions"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["procnetparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
