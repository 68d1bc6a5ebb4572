"""Full pipeline: load → parse → extract → serialize.

Usage:
    python -m alkanes_abi <contract-file> [-o output.json]
    python -m alkanes_abi contracts/ --out-dir build
"""

import logging
import os

from .config import CONTRACT_EXTENSIONS
from .errors import OutputWriteError, SourceReadError
from .extractor import RustAbiExtractor, make_parser
from .models import AlkanesABI

logger = logging.getLogger(__name__)


def make_error(stage, message):
    return {
        "success": False,
        "error": {"stage": stage, "message": message},
    }


def load_source(path) -> bytes:
    if os.path.isdir(path):
        raise SourceReadError(f"Failed to read contract file '{path}': is a directory")
    try:
        with open(path, "rb") as f:
            code_bytes = f.read()
    except OSError as e:
        raise SourceReadError(f"Failed to read contract file '{path}': {e.strerror or e}") from e

    try:
        code_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceReadError(f"Failed to read contract file '{path}': not valid UTF-8") from e
    return code_bytes


def extract_file(path) -> AlkanesABI:
    code_bytes = load_source(path)
    logger.info("Extracting ABI from %s", path)
    return RustAbiExtractor(make_parser(), code_bytes).extract()


def find_contract_files(sources) -> list[str]:
    """Expand directories to the contract files directly inside them."""
    files = []
    for source in sources:
        if os.path.isdir(source):
            for name in sorted(os.listdir(source)):
                path = os.path.join(source, name)
                if os.path.isfile(path) and os.path.splitext(name)[1] in CONTRACT_EXTENSIONS:
                    files.append(path)
        elif os.path.splitext(source)[1] in CONTRACT_EXTENSIONS:
            files.append(source)
    return files


def write_abi(abi: AlkanesABI, output_path):
    directory = os.path.dirname(output_path)
    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(f"Failed to create output directory '{directory}': {e.strerror or e}") from e
    _write_text(abi.to_json(), output_path)


def build_abis(files, out_dir) -> list[str]:
    """Extract every file into ``<out_dir>/<stem>.json``."""
    written = []
    for path in files:
        abi = extract_file(path)
        stem = os.path.splitext(os.path.basename(path))[0]
        output_path = os.path.join(out_dir, f"{stem}.json")
        write_abi(abi, output_path)
        logger.info("ABI written to: %s", output_path)
        written.append(output_path)
    return written


def _write_text(text, output_path):
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    except OSError as e:
        raise OutputWriteError(f"Failed to write ABI to '{output_path}': {e.strerror or e}") from e


def emit(text, output_path=None):
    if output_path:
        _write_text(text, output_path)
    else:
        print(text)
