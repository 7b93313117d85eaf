[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sailbrowser"
version = "0.1.0"
description = "Tab, navigation history and settings storage for a mobile web browser, with OpenSearch config discovery and backup helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["browser", "tabs", "history", "sqlite", "opensearch", "backup"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Browsers",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sailbrowser"]

[tool.pytest.ini_options]
addopts = "-ra"
