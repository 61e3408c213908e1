[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "swifthttp"
version = "0.1.0"
description = "HTTP building blocks: query arguments, cookies, byte conversions and gzip/deflate helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "query-string", "cookie", "gzip", "deflate", "url-encoding"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["swifthttp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
