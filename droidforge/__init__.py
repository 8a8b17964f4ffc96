"""Android SDK and NDK discovery, build targets, jniLibs, adb parsing and artifact paths."""

__version__ = "0.1.0"