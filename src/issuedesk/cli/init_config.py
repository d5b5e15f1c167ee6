"""`--init-config`: write a default config.yml."""

import logging

from ..services import ConfigService
from .output import error, info, success

logger = logging.getLogger(__name__)


def run_init_config(config_service: ConfigService, force: bool = False) -> int:
    """
    Write the default configuration and create the data directory.

    Returns:
        Exit code (0 = config written, 1 = nothing to do or failure)
    """
    config_path = config_service.config_path

    try:
        written = config_service.write_default(force=force)
    except OSError as e:
        logger.error("Failed to write %s: %s", config_path, e)
        error(f"Could not write {config_path}: {e}")
        return 1

    if not written:
        info(f"Config exists: {config_path} (use --force to overwrite)")
        return 1

    success(f"Generated config: {config_path}")

    data_dir = config_service.data_directory
    if data_dir.exists():
        info(f"Data directory exists: {data_dir}/")
    else:
        try:
            data_dir.mkdir(parents=True)
        except OSError as e:
            error(f"Could not create {data_dir}: {e}")
            return 1
        success(f"Created data directory: {data_dir}/")

    info("Add your GitHub token and username to the config, or set GITHUB_TOKEN.")
    return 0
