[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "droidforge"
version = "0.1.0"
description = "Android build tooling helpers: SDK and NDK discovery, build targets, jniLibs management, adb output parsing and build artifact paths"
requires-python = ">=3.10"
dependencies = []
keywords = ["android", "ndk", "sdk", "adb", "gradle", "bundletool", "jnilibs"]
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
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["droidforge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
