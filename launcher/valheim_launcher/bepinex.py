"""
bepinex.py — BepInEx / Unity Doorstop launch environment
--------------------------------------------------------
Composes the environment variables that make the dynamic loader inject
Doorstop (and through it BepInEx) into the Valheim server process, and checks
whether the files those variables point at are present.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union
from .config_resolver import ConfigResolver
from .logging_setup import get_logger

log = get_logger("valheim.launcher.bepinex")

LD_PRELOAD_VAR = "LD_PRELOAD"
LD_LIBRARY_PATH_VAR = "LD_LIBRARY_PATH"
DYLD_LIBRARY_PATH_VAR = "DYLD_LIBRARY_PATH"
DYLD_INSERT_LIBRARIES_VAR = "DYLD_INSERT_LIBRARIES"
DOORSTOP_ENABLE_VAR = "DOORSTOP_ENABLE"
DOORSTOP_LIB_VAR = "DOORSTOP_LIB"
DOORSTOP_LIBS_VAR = "DOORSTOP_LIBS"
DOORSTOP_INVOKE_DLL_PATH_VAR = "DOORSTOP_INVOKE_DLL_PATH"
DOORSTOP_CORLIB_OVERRIDE_PATH_VAR = "DOORSTOP_CORLIB_OVERRIDE_PATH"

DEFAULT_DOORSTOP_LIB = "libdoorstop_x64.so"

@dataclass(frozen=True)
class EnvironmentBinding:
    key: str
    value: str
    quoted: bool = False

    @property
    def rendered(self) -> str:
        return f'"{self.value}"' if self.quoted else self.value

@dataclass(frozen=True)
class LaunchEnvironment:
    ld_preload: str
    ld_library_path: str
    doorstop_enable: str
    doorstop_invoke_dll: str
    doorstop_corlib_override_path: str
    dyld_library_path: str
    dyld_insert_libraries: str

    def bindings(self) -> List[EnvironmentBinding]:
        """Bindings in launch order. Only DYLD_LIBRARY_PATH is emitted quoted."""
        return [
            EnvironmentBinding(DOORSTOP_ENABLE_VAR, self.doorstop_enable),
            EnvironmentBinding(DOORSTOP_INVOKE_DLL_PATH_VAR, self.doorstop_invoke_dll),
            EnvironmentBinding(DOORSTOP_CORLIB_OVERRIDE_PATH_VAR, self.doorstop_corlib_override_path),
            EnvironmentBinding(LD_LIBRARY_PATH_VAR, self.ld_library_path),
            EnvironmentBinding(LD_PRELOAD_VAR, self.ld_preload),
            EnvironmentBinding(DYLD_LIBRARY_PATH_VAR, self.dyld_library_path, quoted=True),
            EnvironmentBinding(DYLD_INSERT_LIBRARIES_VAR, self.dyld_insert_libraries),
        ]

    def as_environ(self) -> Dict[str, str]:
        return {b.key: b.rendered for b in self.bindings()}

def compose_environment(working_dir: Union[str, Path], resolver: ConfigResolver) -> LaunchEnvironment:
    """
    Resolve the seven Doorstop bindings for ``working_dir``.

    Later defaults are built from earlier resolved values, so an override of
    DOORSTOP_LIBS also moves LD_LIBRARY_PATH, DYLD_LIBRARY_PATH and
    DYLD_INSERT_LIBRARIES unless those are overridden themselves.
    """
    wd = str(working_dir)
    doorstop_lib = resolver.resolve(DOORSTOP_LIB_VAR, DEFAULT_DOORSTOP_LIB)
    doorstop_libs = resolver.resolve(DOORSTOP_LIBS_VAR, f"{wd}/doorstop_libs")
    doorstop_invoke_dll = resolver.resolve(
        DOORSTOP_INVOKE_DLL_PATH_VAR, f"{wd}/BepInEx/core/BepInEx.Preloader.dll"
    )
    doorstop_corlib_override_path = resolver.resolve(
        DOORSTOP_CORLIB_OVERRIDE_PATH_VAR, f"{wd}/unstripped_corlib"
    )
    # plain concatenation, no separator
    ld_preload = resolver.resolve(LD_PRELOAD_VAR, "") + doorstop_lib
    ld_library_path = resolver.resolve(LD_LIBRARY_PATH_VAR, f"./linux64:{doorstop_libs}")
    dyld_library_path = resolver.resolve(DYLD_LIBRARY_PATH_VAR, doorstop_libs)
    dyld_insert_libraries = resolver.resolve(
        DYLD_INSERT_LIBRARIES_VAR, f"{doorstop_libs}/{doorstop_lib.replace(':', '')}"
    )

    log.info("Checking for BepInEx Environment...")
    env = LaunchEnvironment(
        ld_preload=ld_preload,
        ld_library_path=ld_library_path,
        doorstop_enable="TRUE",
        doorstop_invoke_dll=doorstop_invoke_dll,
        doorstop_corlib_override_path=doorstop_corlib_override_path,
        dyld_library_path=dyld_library_path,
        dyld_insert_libraries=dyld_insert_libraries,
    )
    for b in env.bindings():
        log.debug("%s: %s", b.key, b.value)
    return env

def _required_paths(env: LaunchEnvironment) -> List[str]:
    # DYLD_* values are checked verbatim; a ':'-separated list will not exist as one path
    return [
        env.doorstop_corlib_override_path,
        env.dyld_insert_libraries,
        env.dyld_library_path,
        env.doorstop_invoke_dll,
    ]

def missing_files(env: LaunchEnvironment) -> List[str]:
    return [p for p in _required_paths(env) if not (p and Path(p).exists())]

def is_installed(env: LaunchEnvironment) -> bool:
    log.debug("Checking for BepInEx specific files...")
    missing = missing_files(env)
    if missing:
        log.debug("BepInEx files missing: %s", ", ".join(missing))
        return False
    log.debug("Found all files required for BepInEx.")
    return True
