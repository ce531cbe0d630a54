import pytest

from valheim_launcher.config_resolver import ConfigResolver
from valheim_launcher.settings import Settings


@pytest.fixture
def working_dir(tmp_path):
    wd = tmp_path / "valheim"
    wd.mkdir()
    return wd


@pytest.fixture
def settings(working_dir):
    return Settings(working_dir=working_dir, password="secret")


@pytest.fixture
def resolver():
    """Resolver over a private dict so tests never touch os.environ."""
    return ConfigResolver({})


@pytest.fixture
def bepinex_files(working_dir):
    """Create the four files BepInEx needs with default Doorstop settings."""
    (working_dir / "unstripped_corlib").mkdir()
    libs = working_dir / "doorstop_libs"
    libs.mkdir()
    (libs / "libdoorstop_x64.so").write_bytes(b"\x7fELF")
    core = working_dir / "BepInEx" / "core"
    core.mkdir(parents=True)
    (core / "BepInEx.Preloader.dll").write_bytes(b"MZ")
    return {
        "corlib": working_dir / "unstripped_corlib",
        "insert_lib": libs / "libdoorstop_x64.so",
        "libs": libs,
        "preloader": core / "BepInEx.Preloader.dll",
    }
