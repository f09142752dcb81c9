[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sealbox"
version = "0.1.0"
description = "A simple, self-hosted secret storage service with an HTTP API backed by SQLite."
requires-python = ">=3.10"
keywords = ["secrets", "secret-storage", "sqlite", "wsgi", "self-hosted"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Security",
]
dependencies = [
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sealbox-server = "sealbox.server:main"

[tool.hatch.build.targets.wheel]
packages = ["sealbox"]

[tool.pytest.ini_options]
addopts = "-ra"
