"""Local application config reader (base file plus profile files)."""
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from src.layered_config.document import Document
from src.layered_config.exceptions import ConfigNotFoundError
from src.layered_config.utils.config.locator import ConfigLocator
from src.layered_config.utils.config.yaml_loader import YAMLLoader


logger = logging.getLogger(__name__)


def read_application_config(
    config_path: Union[str, Path, None],
    active_profiles: Optional[Sequence[str]] = None,
    yaml_loader: Optional[YAMLLoader] = None,
) -> Document:
    """Read and merge the local application files.

    Loading order (later wins):
    1. {config_path}/application.<ext> (required)
    2. {config_path}/application-{profile}.<ext> for each active profile,
       in the order given; missing profile files are skipped

    Every file is profile-filtered document by document.

    Args:
        config_path: Directory holding the application files
        active_profiles: Active profile names
        yaml_loader: Loader to parse files with

    Returns:
        Merged local configuration

    Raises:
        ConfigNotFoundError: No config path, or no application file
        ConfigParseError: A file could not be parsed
    """
    if config_path is None or str(config_path) == "":
        raise ConfigNotFoundError(message="No configuration path given (set CONFIG_PATH)")

    config_dir = Path(config_path)
    if not config_dir.is_dir():
        logger.error(
            f"Config directory not found: {config_dir}",
            extra={"config_dir": str(config_dir)},
        )
        raise ConfigNotFoundError(
            message="Configuration directory not found",
            config_file=str(config_dir),
            searched_paths=[str(config_dir)],
        )

    loader = yaml_loader or YAMLLoader()
    locator = ConfigLocator(config_dir)
    profiles = list(active_profiles or [])

    documents = [loader.load(locator.application_file(), profiles)]

    for profile in profiles:
        profile_file = locator.profile_file(profile)
        if profile_file is None:
            logger.debug(
                f"No config file for profile '{profile}', skipping",
                extra={"profile": profile, "config_dir": str(config_dir)},
            )
            continue
        documents.append(loader.load(profile_file, profiles))

    merged = loader.merger.merge_multiple(*documents)

    logger.info(
        f"Local application config read from {config_dir}",
        extra={"config_dir": str(config_dir), "profiles": profiles, "files": len(documents)},
    )
    return merged
