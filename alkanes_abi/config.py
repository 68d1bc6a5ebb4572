import json
import logging
import os

logger = logging.getLogger(__name__)

TRAIT_NAME = "AlkaneResponder"
ENTRY_METHOD = "execute"
UNKNOWN_CONTRACT = "UnknownContract"

CONTRACT_EXTENSIONS = {".rs"}

CONFIG_FILE = "alkali.config.json"
DEFAULT_OUTPUT_DIR = "build"

SERVER_HOST = "127.0.0.1"
SERVER_PORT = 5000


class Settings:
    """Project settings read from ``alkali.config.json``."""

    def __init__(self, output_dir: str = DEFAULT_OUTPUT_DIR):
        self.output_dir = output_dir


def load_config(path: str = CONFIG_FILE) -> Settings:
    if not os.path.exists(path):
        return Settings()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return Settings()

    contracts = data.get("contracts") if isinstance(data, dict) else None
    if not isinstance(contracts, dict):
        return Settings()

    output_dir = contracts.get("outputDir")
    if not isinstance(output_dir, str) or not output_dir:
        return Settings()
    return Settings(output_dir=output_dir)
