[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pdfextract"
version = "0.1.0"
description = "Join positioned PDF glyphs into lines and paragraphs and write them as JSON"
requires-python = ">=3.10"
dependencies = []
keywords = ["pdf", "text extraction", "layout analysis", "json"]
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
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pdfextract"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
