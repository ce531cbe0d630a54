from __future__ import annotations
import tarfile
from pathlib import Path
from .logging_setup import get_logger

log = get_logger("valheim.launcher.backup")

def backup(input_dir: Path, output_file: Path) -> Path:
    """Write ``input_dir`` as a gzip-compressed tar to ``output_file``."""
    input_dir = Path(input_dir)
    output_file = Path(output_file)
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Backup source {input_dir} is not a directory")
    output_file.parent.mkdir(parents=True, exist_ok=True)
    log.info("Creating backup of %s at %s", input_dir, output_file)
    with tarfile.open(output_file, "w:gz") as tar:
        tar.add(str(input_dir), arcname=input_dir.name)
    log.info("Backup written: %s (%d bytes)", output_file, output_file.stat().st_size)
    return output_file
