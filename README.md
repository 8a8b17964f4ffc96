# droidforge

A Python library of building blocks for Android build tooling. It finds and
checks the Android SDK and NDK, describes the supported Android build targets,
locates toolchain binaries inside the NDK, manages the `jniLibs` directories
of a generated Android Studio project, parses the output of `adb`, and works
out the paths and Gradle task names of APK, APKS and AAB artifacts.

It has no runtime dependencies beyond the standard library.

## Installation

```
pip install droidforge
```

## Modules

### `droidforge.source_props`

- `parse_properties(text)` parses Java `.properties` text (comments, line
  continuations, `=`/`:`/whitespace separators and escapes) into a `dict`.
- `Revision.parse(text)` finds a `major.minor.patch[-betaN]` revision in a
  string; `str()` turns it back into that form. Raises `RevisionError` when
  nothing matches.
- `Pkg.from_props(props)` reads `Pkg.Revision`, raising `PkgError` if it is
  missing or invalid.
- `SourceProps.from_path(path)` reads a `source.properties` file; any failure
  is raised as `SourcePropsError`.

### `droidforge.ndk`

- `NdkEnv.from_environ(environ=None)` reads `NDK_HOME` (from `os.environ` by
  default), checks that it is a directory and that the installed NDK is at
  least r19, raising `NdkError` otherwise.
- `NdkEnv` locates `prebuilt_dir()`, `tool_dir()`,
  `compiler_path(compiler, triple, min_api)`, `binutil_path(binutil, triple)`,
  `readelf_path(triple)` and `libcxx_shared_path(abi)`. A missing tool raises
  `MissingToolError`, which records the tool `name` and the `tried_path`.
- `NdkVersion` formats versions the way the NDK names them (`r21`, `r21b`).
- `host_tag()` names the prebuilt toolchain directory for the running host.
- `parse_required_libs(readelf_output)` returns the set of `NEEDED` shared
  libraries listed in `readelf -d` output.

### `droidforge.config`

- `Metadata.from_dict(data)` reads the kebab-case Android metadata
  (`supported`, `features`, `app-sources`, `app-plugins`, dependency lists,
  `asset-packs`).
- `Config.from_raw(app_root, app_name, raw)` applies the defaults (minimum SDK
  24, Vulkan validation on, project directory `gen/android`) and raises
  `ProjectDirInvalid` for a project directory outside the app root or
  containing spaces. `project_dir()` is `<app_root>/<project dir>/<app_name>`
  and `so_name()` is `lib<name_snake>.so`.
- `under_root(path, root)` tells whether a relative path stays inside a root.

### `droidforge.target`

- `all_targets()` maps the names `aarch64`, `armv7`, `i686` and `x86_64` to
  `Target` values with their triple, ABI and architecture; `name_list()`
  lists the names and `for_abi(abi)` looks a target up by ABI.
- `Target.generate_cargo_config(config, ndk_env)` returns a
  `CargoTargetConfig` with the NDK archiver, the clang linker for the
  configured minimum SDK, and the Android link flags.

### `droidforge.env`

- `AndroidEnv.from_environ(environ=None)` finds the SDK through
  `ANDROID_SDK_ROOT`, falling back to `ANDROID_HOME` with a warning, and the
  NDK through `NdkEnv.from_environ`. A missing SDK raises `AndroidEnvError`.
- `sdk_version()` reads `tools/source.properties` in the SDK;
  `explicit_env()` returns `ANDROID_SDK_ROOT` and `NDK_HOME` for passing to
  Android tools.

### `droidforge.jnilibs`

- `jnilibs_path(config, target)` is the per-ABI `app/src/main/jniLibs`
  directory.
- `JniLibs.create(config, target)` makes that directory;
  `symlink_lib(src)` links a file into it, replacing an existing entry, and
  raises `SymlinkLibError` if the source does not exist.
- `JniLibs.remove_broken_links(config)` deletes dangling symlinks in every
  target's directory.

### `droidforge.adb`

- `adb_args(serial_no, *args)` builds an `adb -s <serial>` argument list.
- `parse_device_serials(output)` returns the serials of ready devices from
  `adb devices` output, in order.
- `parse_device_name(output)` reads the name from
  `dumpsys bluetooth_manager` output, raising `DeviceNameNotMatched`.
- `parse_prop(output)` trims `getprop` output.
- `check_authorized(stderr)` raises `UnauthorizedError` when error output
  shows the device has not authorized USB debugging, and `RunCheckedError`
  for bytes that are not valid UTF-8.

### `droidforge.bundletool`

- `BundletoolJarInfo` (default version 1.8.0, also available as
  `BUNDLE_TOOL_JAR_INFO`) gives the jar's `file_name()`,
  `installation_path(tools_dir)`, `download_url()` and
  `command_args(tools_dir)` (`java -jar <jar>`).
- `install(tools_dir, reinstall=False, opener=None)` downloads the jar unless
  it is already present and returns its path; failures raise
  `BundletoolInstallError`. `opener` defaults to `urllib.request.urlopen`.

### `droidforge.device`

- `apk_path`, `apks_path` and `aab_path(config, profile, flavor)` give the
  Gradle output paths; release artifacts carry the `release-unsigned` suffix
  (`output_suffix(profile)`).
- `Device(serial_no, name, model, target)` prints as `name (model)`, or just
  the name when both are equal, and gives `assemble_task(profile)`,
  `bundle_task(profile)`, `activity_name(reverse_domain, name_snake)` and
  `Device.gradle_log_flag(noise_level)`.
- `Profile`, `NoiseLevel` and `upper_camel_case(text)` support these.

## Example

```python
from droidforge.adb import parse_device_serials
from droidforge.source_props import Revision

output = "List of devices attached\nemulator-5554\tdevice\n"
print(parse_device_serials(output))          # ['emulator-5554']
print(Revision.parse("Pkg.Revision = 21.1.6352462"))  # 21.1.6352462
```

## What it does not do

droidforge has no command-line interface and starts no processes: it does not
run `adb`, Gradle, cargo, `readelf` or bundletool itself. It builds argument
lists, paths and settings, and parses output that the caller obtains. It does
not generate Android Studio projects from templates or write cargo config
files.

## Tests

The test suite lives in `tests/` and runs under pytest; install the `test`
extra to get it.